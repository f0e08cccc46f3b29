"""
RevueCrafters API Testing Suite

End-to-end checks of the RevueCrafters authentication flow and revue CRUD
operations against the deployed service.
"""

__version__ = "1.0.0"
