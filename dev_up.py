# -----------------------------------------------------------------------------
# dev_up.py: Dev launcher for the MathSolver API
# Boots FastAPI (uvicorn), validates the configured worksheet, streams logs.
# Key details:
#   - Binds API to API_HOST (0.0.0.0 inside containers) for port forwarding
#   - Health probe always connects via 127.0.0.1 (0.0.0.0 is not connectable)
#   - src/ is appended to PYTHONPATH so `mathsolver` imports without install
# -----------------------------------------------------------------------------

from __future__ import annotations
import atexit
import os
import sys
import time
import socket
import subprocess
import urllib.error
import urllib.request
from pathlib import Path

from dotenv import load_dotenv

# ---------------------- CONFIG (base defaults) ----------------------
PROJECT_ROOT = Path(__file__).parent.resolve()
API_APP = "api.main:app"              # uvicorn import path for FastAPI app
API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "8000"))
DEFAULT_WORKSHEET = PROJECT_ROOT / "examples" / "worksheet.yaml"
PYTHONPATH_APPEND = str(PROJECT_ROOT / "src")

# ---------------------- HELPERS ----------------------
def echo(msg: str): print(f"[dev_up] {msg}", flush=True)
def fail(msg: str, code: int = 1): echo(f"❌ {msg}"); sys.exit(code)

def check_port_free(host: str, port: int) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.settimeout(0.5)
        return s.connect_ex((host, port)) != 0

def wait_for_api(url: str, timeout: float = 60.0) -> bool:
    start = time.time()
    while time.time() - start < timeout:
        try:
            with urllib.request.urlopen(url, timeout=2) as r:
                if r.status == 200:
                    return True
        except (urllib.error.URLError, ConnectionError, TimeoutError):
            time.sleep(0.4)
    return False

def validate_worksheet(path: str):
    sys.path.insert(0, PYTHONPATH_APPEND)
    from mathsolver.worksheet import Worksheet, WorksheetError
    p = Path(path)
    if not p.exists():
        fail(f"Worksheet YAML not found: {p}")
    try:
        sheet = Worksheet.from_file(str(p))
    except WorksheetError as e:
        fail(f"Worksheet validation failed:\n{e}")
    echo(f"✅ Worksheet OK: {sheet.title!r}, {len(sheet.entries)} function(s)")

def load_env():
    env_path = PROJECT_ROOT / ".env"
    if env_path.exists():
        load_dotenv(env_path)
        echo("Loaded .env file")
    os.environ.setdefault("WORKSHEET_PATH", str(DEFAULT_WORKSHEET))

# ---------------------- STARTERS ----------------------
def start_uvicorn() -> subprocess.Popen:
    env = os.environ.copy()
    env["PYTHONPATH"] = (env.get("PYTHONPATH", "") + os.pathsep + PYTHONPATH_APPEND).strip(os.pathsep)
    host = env.get("API_HOST", API_HOST)
    port = env.get("API_PORT", str(API_PORT))
    cmd = [sys.executable, "-m", "uvicorn", API_APP, "--host", host, "--port", str(port), "--reload"]
    echo(f"▶ Starting API → {' '.join(cmd)}")
    return subprocess.Popen(cmd, cwd=str(PROJECT_ROOT), env=env, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, text=True)

# ---------------------- MAIN ----------------------
def main():
    echo("🚀 Launching MathSolver API...")
    load_env()

    # Resolve env *after* .env load
    bind_host = os.getenv("API_HOST", API_HOST)
    bind_port = int(os.getenv("API_PORT", API_PORT))
    probe_host = "127.0.0.1" if bind_host in ("0.0.0.0", "0") else bind_host
    health_url = f"http://{probe_host}:{bind_port}/health"

    worksheet_path = os.environ["WORKSHEET_PATH"]
    echo(f"Validating {worksheet_path} ...")
    validate_worksheet(worksheet_path)

    if not check_port_free(probe_host, bind_port):
        fail(f"Port {bind_port} is already in use.")

    api = start_uvicorn()

    def cleanup():
        if api.poll() is None:
            api.terminate()
            time.sleep(0.5)
            if api.poll() is None:
                api.kill()
    atexit.register(cleanup)

    echo("⌛ Waiting for API /health ...")
    if not wait_for_api(health_url, timeout=60):
        # dump a few API lines to help debug
        if api.stdout:
            echo("Last API logs:")
            for _ in range(20):
                line = api.stdout.readline()
                if not line: break
                print(f"[API] {line}", end="")
        fail("API failed to become ready in time.")

    echo("✅ API ready")
    echo(f"📘 API docs: http://localhost:{bind_port}/docs")

    try:
        while api.poll() is None:
            line = api.stdout.readline() if api.stdout else ""
            if line:
                print(f"[API] {line}", end="")
            else:
                time.sleep(0.2)
    except KeyboardInterrupt:
        echo("🛑 Ctrl+C pressed, shutting down...")
    finally:
        cleanup()
        echo("✅ API stopped cleanly.")

if __name__ == "__main__":
    main()
