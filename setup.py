from setuptools import setup, find_packages

setup(
    name="catalog-search",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    package_data={"catalog_search": ["templates/omnisearch/*.html"]},
    python_requires=">=3.11",
    install_requires=[
        "pydantic>=2.0.0",
        "fastapi",
        "uvicorn",
        "httpx",
        "jinja2",
        "slowapi",
        "pyyaml",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
    entry_points={
        "console_scripts": [
            "catalog-search=catalog_search.cli:main",
        ],
    },
)
