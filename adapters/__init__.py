"""
Adapters — HTTP and discovery-document I/O.

transport.py turns Requests into Responses or ApiErrors over httplib2.
services.py loads discovery documents, bundled or fetched.
"""
