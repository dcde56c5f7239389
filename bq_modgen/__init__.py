"""bq-modgen: scaffolding for new Bootique modules."""

__version__ = "0.1.0"
