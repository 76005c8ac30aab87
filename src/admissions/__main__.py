"""Entry point for running the assistant as a module.

Usage:
    python -m admissions ask roster.xlsx "who is missing documents?"
    python -m admissions --help
"""

from dotenv import load_dotenv

load_dotenv()  # Load .env before any other imports that need env vars

from admissions.cli import main  # noqa: E402

if __name__ == "__main__":
    main()
