"""Gunicorn config for Railway deployment."""
import json
import os
import sys
import threading
import time
import urllib.request

bind = f"0.0.0.0:{os.environ.get('PORT', '8070')}"
# Signed-in session and snapshots live in process memory: one worker only.
workers = 1
threads = int(os.environ.get("GUNICORN_THREADS", "4"))
timeout = 120
loglevel = os.environ.get("LOG_LEVEL", "info").lower()


def post_worker_init(worker):
    """After the worker starts, hit /api/health and log which backend it picked."""
    def _check():
        time.sleep(3)  # wait for server to be ready
        try:
            port = worker.cfg.bind[0].split(":")[-1] if worker.cfg.bind else "8070"
            url = f"http://127.0.0.1:{port}/api/health"
            with urllib.request.urlopen(url, timeout=30) as resp:
                health = json.load(resp)
            worker.log.info(f"Worker ready, backend: {health.get('backend')}")
        except Exception as e:
            worker.log.warning(f"Health check failed: {e}")

    t = threading.Thread(target=_check, daemon=True)
    t.start()


def worker_exit(server, worker):
    """Close realtime channels and sign out before the worker goes away."""
    app_module = sys.modules.get("wsgi")
    if app_module is not None:
        app_module.session.close()
