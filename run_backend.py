#!/usr/bin/env python
"""Script to run the Taskboard API server."""
import os
import sys
from pathlib import Path

# Get the directory where this script is located
backend_dir = Path(__file__).resolve().parent

# Add project root to Python path so ``taskboard`` imports without installing
sys.path.insert(0, str(backend_dir))

# Change to project directory so the default SQLite file lands here
os.chdir(backend_dir)

import uvicorn

if __name__ == "__main__":
    uvicorn.run(
        "taskboard.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("ENV", "production") == "development",
    )
