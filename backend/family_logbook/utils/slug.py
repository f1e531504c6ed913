import re
import secrets
import string
import unicodedata

_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits
_INVITE_ALPHABET = string.ascii_uppercase + string.digits


def slugify(text):
    """
    "Smith Family" -> "smith-family"
    "The Johnson's Logbook!" -> "the-johnsons-logbook"
    "Café Lee" -> "cafe-lee"
    """
    slug = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    slug = slug.strip().lower()
    slug = re.sub(r"[^a-z0-9\s_-]", "", slug)
    slug = re.sub(r"[\s_-]+", "-", slug)
    return slug.strip("-")


def is_valid_slug(slug):
    return bool(re.fullmatch(r"[a-z0-9]+(?:-[a-z0-9]+)*", slug or ""))


def random_suffix(length=4):
    return "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(length))


def generate_invite_code(length=8):
    return "".join(secrets.choice(_INVITE_ALPHABET) for _ in range(length))
