"""Database helpers shared by the service layers."""

from django.db import models


def upsert(model, *, lookup: dict, values: dict) -> models.Model:
    """
    Insert a row or replace the given columns of the row matching ``lookup``.

    Issues a single ``INSERT ... ON CONFLICT (...) DO UPDATE`` keyed by the
    natural key in ``lookup``, so two writers racing on the same key end in
    last-write-wins rather than a duplicate or an IntegrityError. The
    stored row is re-read by its natural key because the primary key of an
    existing row is kept on conflict.

    Args:
        model: Model class with a unique constraint over ``lookup`` keys
        lookup: Natural key columns and values (FK columns as ``<name>_id``)
        values: Columns to write on insert and overwrite on conflict

    Returns:
        The stored model instance
    """
    unique_fields = [key[:-3] if key.endswith('_id') else key for key in lookup]
    update_fields = list(values)
    if any(f.name == 'updated_at' for f in model._meta.get_fields()):
        update_fields.append('updated_at')

    model.objects.bulk_create(
        [model(**lookup, **values)],
        update_conflicts=True,
        unique_fields=unique_fields,
        update_fields=update_fields,
    )
    return model.objects.get(**lookup)
