"""Build a Docker image and push it to Amazon ECR from a profile-based deploy file."""

__version__ = "0.1.0"
