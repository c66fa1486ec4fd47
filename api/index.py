# api/index.py
# Serverless entrypoint: exposes the gateway's Flask app as `app`
import sys
import os

# Add the project root to the path so `backend.*` imports resolve
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from backend.gateway.server import create_app

app = create_app()
