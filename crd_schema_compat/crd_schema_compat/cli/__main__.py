"""Module entrypoint for `python -m crd_schema_compat.cli`.

Delegates to the verification CLI implementation.
"""

from .run_verify import main


if __name__ == "__main__":
    main()
