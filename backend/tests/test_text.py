from backend.recipes.text import normalize_text


def test_normalize_folds_case_and_accents():
    assert normalize_text("Café") == "cafe"
    assert normalize_text("CAFE") == "cafe"
    assert normalize_text("CAFÉ") == "cafe"


def test_normalize_maps_every_accented_vowel():
    assert normalize_text("áàãâä éèêë íìîï óòõôö úùûü ýÿ ñ ç") == (
        "aaaaa eeee iiii ooooo uuuu yy n c"
    )


def test_normalize_trims_whitespace():
    assert normalize_text("  Feijão Tropeiro \n") == "feijao tropeiro"


def test_normalize_empty_input():
    assert normalize_text("") == ""
    assert normalize_text(None) == ""
    assert normalize_text("   ") == ""


def test_normalize_is_idempotent():
    for text in ["Pão de Queijo", "  AÇAÍ  ", "crème brûlée", "Ñoquis"]:
        once = normalize_text(text)
        assert normalize_text(once) == once
