"""crudgen -- Quasar CRUD scaffolding for Hydra API resources."""

__version__ = "0.1.0"
