"""
HTTP access to the Jenkins server.
"""

from .jenkins import JenkinsClient

__all__ = [
    "JenkinsClient",
]
