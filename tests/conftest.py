import pytest

from builders import PEOPLE_FIELDS, build_paradox


@pytest.fixture
def make_paradox():
    return build_paradox


@pytest.fixture
def people_db(tmp_path):
    blocks = [
        [[1, "Alice", 10, 1500], [2, "Bob", -3, None]],
        [[3, "Carol", 0, -70000]],
    ]
    path = tmp_path / "PEOPLE.DB"
    path.write_bytes(build_paradox(PEOPLE_FIELDS, blocks, table_name="PEOPLE.DB"))
    return path
