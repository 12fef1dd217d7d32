import io
import re

from setuptools import find_packages, setup

__version__ = re.search(
    r'__version__\s*=\s*[\'"]([^\'"]*)[\'"]',
    io.open("src/deferrun/version.py", encoding="utf_8_sig").read(),
).group(1)


setup(
    name="deferrun",
    version=__version__,
    description="deferrun is a Python library for running a job exactly once, at startup or on demand.",
    long_description="""deferrun is a Python library for running a job exactly once, at startup or on demand, with named pre and post actions around it.""",
    author="",
    author_email="",
    package_dir={"": "src"},
    packages=find_packages("src"),
    zip_safe=False,
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2",
        "cloudpickle",
        "fire",
    ],
    extras_require={
        "tests": ["pytest"],
    },
    entry_points={
        "console_scripts": ["deferrun=deferrun.__main__:main"],
    },
)
