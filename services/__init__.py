"""
Service layer for AWS operations.

Each service wraps one AWS client (S3, SES, SNS, DynamoDB) and owns it for
its lifetime; services.registry builds them from configuration.
"""
