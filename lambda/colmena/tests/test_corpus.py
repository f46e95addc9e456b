from colmena.corpus import Category, load_elements, parse_elements, parse_forms, parse_lemmas

ELEMENTS = [
    "Elemento\tLema\tCategoría\tFrecuencia\tFrec. norm. sin signos\tFrec. norm.\n",
    "casa\tcasa\tN\t5000\t30.5\t28.1\n",
    "corrí\tcorrer\tV\t40\t0.2\t0.2\n",
    "casa\tcasar\tV\t120\t0.7\t0.6\n",
    "roto\n",
    "malo\tmalo\tZ\t300\t1.0\t1.0\n",
    "bueno\tbueno\tA\tmucho\t1.0\t1.0\n",
    "\n",
]


def test_parse_elements_merges_duplicates():
    store = parse_elements(ELEMENTS)
    casa = store.get("casa")
    assert casa.raw_frequency == 5120
    assert casa.lemma == "casa"          # first occurrence wins
    assert casa.category is Category.NOUN
    assert abs(casa.norm_frequency_no_marks - 31.2) < 1e-9
    assert abs(casa.norm_frequency - 28.7) < 1e-9


def test_parse_elements_skips_malformed_rows():
    store = parse_elements(ELEMENTS)
    assert set(e.word for e in store) == {"casa", "corrí"}
    assert "Elemento" not in store
    assert len(store) == 2


def test_parse_forms_and_lemmas():
    forms = parse_forms(["casa\t5120\t29.0\n", "casa\t10\t0.1\n", "mal\tx\t1\n"])
    assert forms.get("casa").raw_frequency == 5130
    assert forms.get("casa").lemma is None
    assert "mal" not in forms

    lemmas = parse_lemmas(["correr\tV\t9000\t50.0\t49.0\n"])
    correr = lemmas.get("correr")
    assert correr.lemma == "correr"
    assert correr.category is Category.VERB
    assert lemmas.frequency("correr") == 9000
    assert lemmas.frequency("andar") is None


def test_parse_skips_rows_the_reader_rejects():
    store = parse_elements([
        "casa\tcasa\tN\t5000\t1.0\t1.0\n",
        "x" * 200000 + "\tx\tN\t1\t1.0\t1.0\n",
        "gato\tgato\tN\t800\t1.0\t1.0\n",
    ])
    assert store.frequency("casa") == 5000
    assert store.frequency("gato") == 800
    assert len(store) == 2


def test_load_elements_from_file(tmp_path):
    path = tmp_path / "crea_elementos.txt"
    path.write_text("".join(ELEMENTS), encoding="utf-8")
    store = load_elements(path)
    assert store.get("corrí").lemma == "correr"


def test_load_tolerates_bad_bytes(tmp_path):
    path = tmp_path / "crea_elementos.txt"
    path.write_bytes("casa\tcasa\tN\t5000\t1.0\t1.0\n".encode() + b"ca\xf1a\tca\xf1a\tN\t70\t1.0\t1.0\n")
    store = load_elements(path)
    assert store.frequency("casa") == 5000
    assert len(store) == 2
