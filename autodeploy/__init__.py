"""autodeploy - deploy a static build to a remote host and roll it back."""

__version__ = "0.1.0"
