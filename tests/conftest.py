import sys
from pathlib import Path

project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

pytest_plugins = [
    "tests.fixtures.data_fixtures",
    "tests.fixtures.model_fixtures",
]
