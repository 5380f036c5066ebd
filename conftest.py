# Root conftest.py - loads .env before test collection so YARROW_* variables
# are visible to modules that read configuration at import or fixture time.
from dotenv import load_dotenv
load_dotenv()

# Note: Fixtures from tests/conftest.py are automatically discovered by pytest
# since tests/ is a subdirectory.
