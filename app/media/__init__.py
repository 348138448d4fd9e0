"""
Media app for chat attachments, order package images and avatars.

Stores raw image payloads in the default storage backend (S3-compatible
bucket in production, local filesystem in development) and turns stored
keys into short-lived URLs for clients. Keys are opaque to every other app.
"""
