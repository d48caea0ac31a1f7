"""Module entrypoint for ``python -m coco``.

Argument parsing, input loading, and the interactive session all happen in
``coco.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
