from django.db import transaction

from .models import Scripture
from .scripture import Library


# PUBLIC_INTERFACE
def ensure_default_scriptures() -> int:
    """Ensure the Scripture table has the built-in practice texts.

    Returns number of scriptures inserted (0 if any already present).
    """
    if Scripture.objects.exists():
        return 0
    library = Library()
    library.load_defaults()
    return store_library(library)


# PUBLIC_INTERFACE
def store_library(library: Library) -> int:
    """Insert every library entry as a Scripture row, keeping library order."""
    with transaction.atomic():
        Scripture.objects.bulk_create([Scripture.from_reference(e.reference, e.text) for e in library])
    return len(library)


# PUBLIC_INTERFACE
def library_from_db(rng=None) -> Library:
    """Build a Library from active scriptures in insertion order."""
    library = Library(rng=rng)
    for scripture in Scripture.objects.filter(is_active=True).order_by("id"):
        library.add(scripture.reference, scripture.text)
    return library
