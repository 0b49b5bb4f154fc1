from datetime import datetime, timezone

from src.ebd_registry.ebd_registry.registrations.filenames import receipt_object_name, sanitize_filename


def test_sanitize_strips_diacritics_and_symbols():
    assert sanitize_filename("Comprovante Pix Conceição.jpeg") == "Comprovante_Pix_Conceicao.jpeg"
    assert sanitize_filename("  ofertá@@#2026!!.pdf") == "oferta_2026_.pdf"


def test_sanitize_trims_underscores_and_falls_back():
    assert sanitize_filename("__a__b__") == "a_b"
    assert sanitize_filename("###") == "arquivo"
    assert sanitize_filename("") == "arquivo"


def test_object_name_is_prefixed_with_epoch_millis():
    now = datetime(2026, 3, 1, 13, 0, 0, 250000)
    expected = int(now.replace(tzinfo=timezone.utc).timestamp() * 1000)

    assert receipt_object_name("pix.png", now=now) == f"{expected}_pix.png"
