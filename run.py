#!/usr/bin/env python3
"""
VietQR Core Entry Point

Starts the FastAPI server for account name lookups and VietQR payloads.
"""

import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from vietqr_core.api import run_server
from vietqr_core.config import get_config


if __name__ == "__main__":
    config = get_config()

    print("🏦 Starting VietQR Core API...")
    print("🔎 Account lookup chain: Primary -> Simulated -> Synthetic")
    print("🧾 VietQR payloads with CRC16-CCITT trailer")
    print(f"🌐 API available at: http://localhost:{config.api_port}")
    print(f"📚 Documentation at: http://localhost:{config.api_port}/docs")
    print()

    try:
        run_server(
            host=config.api_host,
            port=config.api_port,
            debug=False  # Set to True for development
        )
    except KeyboardInterrupt:
        print("\n👋 Shutting down VietQR Core API...")
    except Exception as e:
        print(f"❌ Error starting server: {e}")
        sys.exit(1)
