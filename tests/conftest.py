import os
import tempfile

# Keep the launcher's data directory out of the home directory during tests
os.environ.setdefault("LAUNCHGUARD_DATA_DIR", tempfile.mkdtemp(prefix="launchguard-test-"))
