from setuptools import setup

setup(
    name="meshprim",
    version="0.1.0",
    packages=["meshprim"],
    install_requires=["numpy"],
    extras_require={"test": ["pytest", "pytest-cov"]},
)
