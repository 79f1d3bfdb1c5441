"""
Development backend for the wedding guest list.

A small FastAPI application implementing the HTTP contract the admin
client consumes, so the client can be run and tested without the real
service.  Import ``create_app`` from :mod:`.main` to build an instance.
"""
