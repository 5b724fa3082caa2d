"""WSGI entrypoint for MoodJournal.

    gunicorn -c deploy/gunicorn.conf.py moodjournal.wsgi:app
"""

from __future__ import annotations

from moodjournal import create_app

app = create_app()

if __name__ == "__main__":
    import os

    host = os.environ.get("FLASK_RUN_HOST", "127.0.0.1")
    port = int(os.environ.get("FLASK_RUN_PORT", "5001"))
    app.run(host=host, port=port)  # nosec B104
