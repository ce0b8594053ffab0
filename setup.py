from setuptools import setup, find_packages

setup(
    name="spec-helpers",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "playwright>=1.44.0",
        "python-dotenv>=1.0.1",
        "click>=8.2.0",
        "rich>=13.7.1",
        "pydantic>=2.10.6",
    ],
    entry_points={
        'console_scripts': [
            'spechelpers=spechelpers.cli:main',
        ],
    },
    author="nickpending",
    author_email="rudy@voidwire.info",
    description="Data-driven test groups and DOM/window utilities for browser test suites",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Framework :: Pytest",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Testing",
        "Development Status :: 3 - Alpha",
    ],
    python_requires=">=3.8",
    extras_require={
        "dev": [
            "black>=24.10.0",
            "isort>=6.0.1",
            "mypy>=1.15.0",
            "pytest>=8.2.2",
            "pytest-cov>=6.1.1",
        ],
    },
)
