"""Gallery Service Package."""

__version__ = "1.0.0"
__description__ = (
    "Serverless image gallery backend using AWS Lambda, S3, and DynamoDB"
)

__all__ = ["handlers", "core"]
