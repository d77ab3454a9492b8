"""Error taxonomy for minilisp.

Inside the evaluator errors are never raised across an evaluation step: an
instance of one of these classes is attached to the failing Context (see
``Context.fail``) and the caller inspects ``Context.has_error``. The classes
still derive from Exception so that API users can re-raise a carried error
with ``Context.raise_for_error()``, and so that the reader can raise
``ReaderError`` directly.
"""


class MinilispError(Exception):
    """ Base class for all minilisp errors"""
    pass


class UnboundIdentifier(MinilispError):
    """ An identifier was looked up before it was bound"""


class ReservedIdentifier(MinilispError):
    """ Attempt to bind a name reserved for a special form or primitive"""


class MalformedForm(MinilispError):
    """ Wrong shape or arity for a special form, primitive or call"""


class TooFewArguments(MalformedForm):
    """ A form or call received fewer arguments than it requires"""


class TooManyArguments(MalformedForm):
    """ A form or call received more arguments than it accepts"""


class MalformedParameters(MalformedForm):
    """ A lambda or macro parameter list is not a proper list of identifiers"""


class TypeMismatch(MinilispError):
    """ Arithmetic or pair operation applied to an operand of the wrong type"""


class NotCallable(MinilispError):
    """ The head of an application is neither a form, a closure nor a macro"""


class CaptureFailure(MinilispError):
    """ A closure needs a binding that is absent from its defining environment"""


class ReaderError(MinilispError):
    """ Source text could not be tokenized or read into expressions"""


class IncompleteInput(ReaderError):
    """ Source ended in the middle of an expression"""


class RecursionLimitExceeded(MinilispError):
    """ Evaluation nested deeper than the Python recursion limit allows"""
