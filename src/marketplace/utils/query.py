"""Helpers for reading complete result sets from Protean querysets."""

BATCH_SIZE = 100


def fetch_all(queryset, batch_size: int = BATCH_SIZE) -> list:
    """Return every record matching ``queryset``, fetched in ``batch_size`` pages.

    Querysets apply a default page size, so ``.all()`` alone can silently
    truncate large tables.
    """
    records = []
    offset = 0
    while True:
        page = queryset.offset(offset).limit(batch_size).all().items
        records.extend(page)
        if len(page) < batch_size:
            return records
        offset += batch_size
