"""Configure test suite environment"""
import os
import sys

# Add the project root directory to the Python path for src imports
project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)

os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "true")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "azureflow-test")
