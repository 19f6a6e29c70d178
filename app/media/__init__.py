"""
Media app: the blob store behind chat attachments and avatars.

This app has no models. It wraps Django's default storage so that callers
can upload files and bulk-delete them by remote id, with a boto3 fast path
when the storage backend is S3.
"""
