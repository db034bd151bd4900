import random
import re

from ogp2gbl.pipeline.slugs import SlugRegistry, base_slug, strip_name_prefixes


def test_strip_name_prefixes_removes_owner_prefixes():
    assert strip_name_prefixes("SDE_DATA.CA_GEOLOGY") == "CA_GEOLOGY"
    assert strip_name_prefixes("GISPORTAL.GISOWNER01.ROADS") == "ROADS"
    assert strip_name_prefixes("SDE2.G1234") == "G1234"


def test_base_slug_normalises_characters():
    assert base_slug("Berkeley", "ADM_SUPERVISOR", "ignored") == "berkeley-adm-supervisor"
    assert base_slug("Tufts", "a..b__c", None) == "tufts-a-b-c"


def test_base_slug_falls_back_to_display_name():
    assert base_slug("MIT", "SDE_DATA.X", "Boston roads 1990") == "mit-boston"
    assert base_slug("MIT", None, None) == "mit-"


def test_registry_returns_base_slug_first():
    registry = SlugRegistry(random.Random(0))
    assert registry.slug("Harvard", "SDE2.G1234", "") == "harvard-g1234"
    assert "harvard-g1234" in registry
    assert len(registry) == 1


def test_registry_slugs_are_unique():
    registry = SlugRegistry(random.Random(0))
    slugs = [registry.slug("Tufts", "ROADS", "Roads") for _ in range(50)]

    assert len(set(slugs)) == 50
    assert slugs[0] == "tufts-roads"
    for slug in slugs[1:]:
        assert re.fullmatch(r"tufts-roads-\d{6}", slug)


class _RepeatingRandom:
    def __init__(self, values):
        self._values = list(values)

    def randrange(self, _stop):
        return self._values.pop(0)


def test_registry_retries_on_suffix_collision():
    registry = SlugRegistry(_RepeatingRandom([7, 7, 8]))
    assert registry.register("x") == "x"
    assert registry.register("x") == "x-000007"
    assert registry.register("x") == "x-000008"
