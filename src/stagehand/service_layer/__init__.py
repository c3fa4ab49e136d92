"""Service layer for STAGEHAND.

The four startup components, each a function of explicit inputs plus the
ports defined in `stagehand.interfaces`:

- `cache`: reassemble the split cache file.
- `readiness`: poll a dependency until it is ready.
- `bootstrapper`: ensure the database exists and run init units.
- `launcher`: hand the process over to the first existing launch candidate.
"""
