import os

# Keep telelog quiet during the test run; the telemetry module reads this at import.
os.environ.setdefault("RICHTEXT_ENGINE_DISABLE_CONSOLE", "1")
