"""
Regression Tracker - folders, test scripts, projects and issues for
regression testing.
"""

from .main import create_workspace
from .workspace import RegressionWorkspace

__all__ = ["create_workspace", "RegressionWorkspace"]

__version__ = "1.0.0"
