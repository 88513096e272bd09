# main.py
# Entry point for `uvicorn main:app`; settings come from the environment here only.
from app_factory import create_app

app = create_app()
