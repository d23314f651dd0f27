"""Module entrypoint for `python -m study_aids`."""

from __future__ import annotations

from study_aids.cli import main_entry

if __name__ == "__main__":  # pragma: no cover
    main_entry()
