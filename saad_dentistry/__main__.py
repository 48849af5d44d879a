"""
Entry point for running the application as a module.
"""

import uvicorn

from .config import get_settings

if __name__ == "__main__":
    uvicorn.run("saad_dentistry.main:app", host="0.0.0.0", port=get_settings().port)
