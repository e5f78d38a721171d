"""Class whitelist matching."""

from typing import Iterable


def is_whitelisted(class_name: str, whitelist: Iterable[str]) -> bool:
    """Check if a class name contains any whitelist entry.

    Matching is plain substring containment on the fully-qualified name, not a
    package or prefix match: the entry ``"oo"`` whitelists ``com.acme.Foo``.

    Parameters
    ----------
    class_name : str
        Fully-qualified class name
    whitelist : Iterable[str]
        Whitelist entries

    Returns
    -------
    bool
        True if any entry occurs in ``class_name``
    """
    return any(entry in class_name for entry in whitelist)
