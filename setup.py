from setuptools import setup, find_packages

setup(
    name="pushover-sdk",
    version="0.1.0",
    description="Async Python SDK for the Pushover notification API",
    author="Fluxtopus Team",
    packages=find_packages(include=["pushover_sdk", "pushover_sdk.*"]),
    install_requires=[
        "httpx>=0.25.1",
        "pydantic>=2.5.0",
        "structlog>=23.2.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    python_requires=">=3.10",
)
