from setuptools import setup, find_packages

setup(
    name="helpdesk-api",
    version="0.1",
    packages=find_packages(exclude=["tests", "tests.*", "scripts"]),
    package_data={"helpdesk": ["database/migrations/*.sql"]},
    python_requires=">=3.10",
    install_requires=[
        "flask",
        "flask-cors",
        "python-dotenv",
        "supabase",
        "postgrest",
        "httpx",
        "PyJWT",
        "psycopg2-binary",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
)
