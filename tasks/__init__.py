"""Tasks resource: in-memory store, seed loader, validator and HTTP router.

- Task record with ``to_dict()`` serialisation
- Thread-safe TaskStore owning the collection and the id generator
- Fail-soft loader for the JSON seed file
- Rules-style request validator
- FastAPI router under /tasks
"""
