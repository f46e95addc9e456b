# lambda/colmena/tests/conftest.py
import os

os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "1")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "Colmena")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")

from dataclasses import dataclass

import pytest

from colmena.pool import WordPool, set_default_pool

# (surface word, lemma); every word with an "a" fits the letters a c d e g o r
WORDS = [
    ("acera", "acera"), ("acogedor", "acogedor"), ("acogedora", "acogedor"),
    ("acoger", "acoger"), ("acordar", "acordar"), ("acorde", "acorde"),
    ("acordé", "acordar"), ("adorar", "adorar"), ("agrado", "agrado"),
    ("arado", "arado"), ("arco", "arco"), ("arder", "arder"),
    ("cadera", "cadera"), ("cara", "cara"), ("cardo", "cardo"),
    ("carga", "carga"), ("cargar", "cargar"), ("cargo", "cargo"),
    ("cargó", "cargar"), ("caro", "caro"), ("carro", "carro"),
    ("cerca", "cerca"), ("dardo", "dardo"), ("decorar", "decorar"),
    ("dorada", "dorado"), ("dorado", "dorado"), ("garra", "garra"),
    ("gorda", "gordo"), ("gorra", "gorra"), ("grada", "grada"),
    ("rara", "raro"), ("raro", "raro"), ("recordar", "recordar"),
    ("regar", "regar"),
    # same letters, no "a"
    ("cedro", "cedro"), ("cero", "cero"), ("coger", "coger"), ("ocre", "ocre"),
    # outside the letter set
    ("perro", "perro"), ("gato", "gato"), ("papa", "papa"), ("papá", "papá"),
    ("mesa", "mesa"),
]
# 34 of them contain "a" and fit a c d e g o r


@pytest.fixture
def pool():
    return WordPool.from_iterables(WORDS, ["acogedor", "acogedora"])


@pytest.fixture
def default_pool(pool):
    set_default_pool(pool)
    yield pool
    set_default_pool(None)


@dataclass
class LambdaContext:
    function_name: str = "colmena-test"
    memory_limit_in_mb: int = 128
    invoked_function_arn: str = "arn:aws:lambda:us-east-1:123456789012:function:colmena-test"
    aws_request_id: str = "52fdfc07-2182-154f-163f-5f0f9a621d72"


@pytest.fixture
def lambda_context():
    return LambdaContext()
