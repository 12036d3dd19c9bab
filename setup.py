from setuptools import setup, find_packages

setup(
    name="yt-transcript",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "fastapi>=0.110.0",
        "uvicorn>=0.27.0",
        "pydantic>=2.0",
        "python-dotenv>=1.0.0",
        "requests>=2.31.0",
        "urllib3>=2.0",
        "colorlog>=6.7.0",
        "yt-dlp>=2024.1.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
            "httpx>=0.25",
            "pytest-cov>=4.1",
        ],
    },
    entry_points={
        "console_scripts": [
            "yt-transcript-api=yt_transcript_api.app:main",
        ],
    },
    python_requires=">=3.9",
    description="HTTP API returning the title and timed transcript of a YouTube video",
)
