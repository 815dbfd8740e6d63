from setuptools import setup, find_packages

setup(
    name="mcp_apiserver",
    version="1.0.0",
    packages=find_packages("src"),
    package_dir={"": "src"},
    include_package_data=True,
    install_requires=[
        # Core Dependencies
        "pyyaml>=6.0.1",
        "loguru>=0.7.0",

        # API Dependencies
        "fastapi>=0.95.0",
        "uvicorn>=0.22.0",
        "python-multipart>=0.0.6",
        "aiofiles>=23.2.1",
        "httpx>=0.24.0",

        # Additional Dependencies
        "pydantic>=2.0.0",
        "jsonschema>=4.17.3",
    ],
    extras_require={
        "dev": [
            # Testing
            "pytest>=7.3.1",
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=4.0.0",
            "pytest-mock>=3.10.0",

            # Development Tools
            "black>=23.3.0",
            "flake8>=6.0.0",
            "mypy>=1.3.0",
            "pylint>=2.17.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "mcp-apiserver=mcp_apiserver.__main__:main",
        ],
    },
    python_requires=">=3.10",
)
