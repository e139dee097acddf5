from setuptools import setup, find_packages

setup(
    name="catalog_sync",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "fastapi>=0.109.2",
        "uvicorn>=0.27.1",
        "sqlalchemy[asyncio]>=2.0.27",
        "asyncpg>=0.29.0",
        "python-dotenv>=1.0.1",
        "alembic>=1.13.1",
        "pydantic>=2.6.1",
        "pydantic-settings>=2.1.0",
        "cryptography>=42.0.0",
        "ShopifyAPI>=12.4.0",
        "celery>=5.3.6",
        "redis>=5.0.1",
        "strawberry-graphql>=0.220.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0.0",
            "pytest-asyncio>=0.23.5",
            "aiosqlite>=0.20.0",
            "httpx>=0.27.0",
        ],
    },
)
