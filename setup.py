# setup.py
from setuptools import setup, find_packages

setup(
    name="minilisp",
    version="0.1.0",
    description="A small Lisp runtime with minimal closure capture, macros and quasiquote",
    packages=find_packages(include=["minilisp", "minilisp.*"]),
    package_data={"minilisp": ["prelude/*.lisp"]},
    python_requires=">=3.10",
    install_requires=[
        "pyrsistent",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["minilisp=minilisp.__main__:main"],
    },
    zip_safe=False,
)
