from setuptools import setup, find_packages

setup(
    name="dealerdesk",
    version="0.4.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"dealerdesk": ["data/seed.yaml"]},
    install_requires=[
        "pandas>=2.0",
        "numpy>=1.24",
        "matplotlib>=3.7",
        "reportlab>=4.0",
        "python-dateutil>=2.8",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "dealerdesk=dealerdesk.cli:main",
        ],
    },
    python_requires=">=3.10",
    description="In-memory dealership records: enquiries, orders, pricing and delivery",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ]
)
