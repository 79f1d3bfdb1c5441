"""
Top-level package for the wedding guest list admin.

Submodules:

* ``client`` – session manager, guest data client, presentation state
  and the ``guest-admin`` console.
* ``app`` – a development backend speaking the same HTTP contract.
* ``core`` – configuration, logging, storage and security helpers.
* ``schemas`` – pydantic models shared by both sides.
"""

__version__ = "1.0.0"
