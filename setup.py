# setup.py
from setuptools import setup, find_packages

setup(
    name="conslisp",
    version="0.1.0",
    description="A small Lisp interpreter built on shared, lock-protected cons cells",
    packages=find_packages(include=["conslisp", "conslisp.*"]),
    package_data={"conslisp": ["prelude/*.lisp"]},
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["conslisp=conslisp.__main__:main"],
    },
    zip_safe=False,
)
