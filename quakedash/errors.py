"""Exceptions raised by quakedash."""


class QuakeDashError(Exception):
    """Base class for all quakedash errors."""


class SchemaError(QuakeDashError):
    """The input file is unreadable or lacks a required column."""


class EmptyDatasetError(QuakeDashError):
    """A statistic needs at least one value but the record set has none."""
