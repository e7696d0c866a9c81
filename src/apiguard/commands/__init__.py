"""Built-in ``apiguard`` sub-commands."""
