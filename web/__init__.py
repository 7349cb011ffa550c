"""
Request/response plumbing for API Gateway Lambda functions.
"""
