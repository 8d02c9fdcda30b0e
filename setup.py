import setuptools

setuptools.setup(
    name="asset_availability_analytics",
    version="0.1.0",
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    py_modules=["constants", "exceptions", "main"],
    install_requires=[
        "dataclasses-json>=0.6.0",
        "pymongo>=4.13",
        "python-dateutil>=2.9.0",
        "python-dotenv==1.1.1",
    ],
    extras_require={
        "test": ["pytest>=8.0"],
    },
    entry_points={
        "console_scripts": ["asset-availability=main:main"],
    },
    python_requires=">=3.11",
)
