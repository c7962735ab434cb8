import pytest

from bloodline_chart.models import Character


def char(char_id: str, name: str | None = None, **kwargs) -> Character:
    return Character(id=char_id, name=name or char_id.title(), **kwargs)


@pytest.fixture
def realm() -> list[Character]:
    """Three houses over three generations, with one betrothal and one dangling parent."""
    return [
        char("aldric", "Aldric Stormvale", main_house="Stormvale", birth_year=1100, death_year=1160),
        char("brienne", "Brienne Ashford", main_house="Ashford", birth_year=1105),
        char("cedric", "Cedric Stormvale", parent_1="aldric", parent_2="brienne", main_house="Stormvale", birth_year=1125),
        char(
            "daria",
            "Daria Stormvale",
            parent_1="aldric",
            parent_2="brienne",
            betrothed="edmund",
            main_house="Stormvale",
            birth_year=1128,
        ),
        char("edmund", "Edmund Ravencrest", main_house="Ravencrest", birth_year=1126),
        char("fiona", "Fiona Ravencrest", main_house="Ravencrest", birth_year=1127),
        char("gareth", "Gareth Stormvale", parent_1="cedric", parent_2="fiona", main_house="Stormvale", birth_year=1150),
        char(
            "helena",
            "Helena Stormvale",
            parent_1="cedric",
            parent_2="fiona",
            main_house="Stormvale",
            secondary_house="Ravencrest",
            birth_year=1152,
        ),
        char("ivo", "Ivo Ashford", parent_1="brienne", main_house="Ashford", birth_year=1130),
        char("jora", "Jora Ashford", parent_1="ivo", parent_2="nobody", main_house="Ashford", birth_year=1155),
    ]
