"""Development runner.
Usage: python run.py  (reads .env if present)
Point HOTELHUB_API_URL at the backend; defaults to http://localhost:5000/api.
"""

from __future__ import annotations

from dotenv import load_dotenv

from hotelhub import create_app

load_dotenv()

app = create_app()

if __name__ == "__main__":  # pragma: no cover
    import os
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "3000"))
    app.run(debug=True, host=host, port=port)
