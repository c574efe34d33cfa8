from graph import build_graph, get_parents
from models import PersonRecord
from validation import validate_graph, validate_spouse_links


def person(pid, gen=1, mother=None, father=None, spouse=None, dob=None, dod=None, gender="M"):
    return PersonRecord(
        person_id=pid,
        generation=gen,
        first_name=pid,
        gender=gender,
        mother_id=mother,
        father_id=father,
        spouse_id=spouse,
        birth_date=dob,
        death_date=dod,
    )


def family():
    return [
        person("DAD", 1, spouse="MOM", dob="1950-01-01"),
        person("MOM", 1, spouse="DAD", dob="1952-01-01", gender="F"),
        person("KID", 2, mother="MOM", father="DAD", dob="1980-01-01"),
    ]


def test_build_graph_edges():
    G = build_graph(family())
    assert set(G.nodes) == {"DAD", "MOM", "KID"}
    assert G.edges["MOM", "KID"]["relationship_type"] == "PARENT_OF"
    assert G.edges["DAD", "KID"]["relationship_type"] == "PARENT_OF"
    assert G.edges["DAD", "MOM"]["relationship_type"] == "SPOUSE_OF"
    assert G.edges["MOM", "DAD"]["relationship_type"] == "SPOUSE_OF"
    assert G.nodes["KID"]["generation"] == 2
    assert get_parents(G, "KID") == ["MOM", "DAD"]


def test_build_graph_ignores_dangling_and_self_references():
    G = build_graph([person("A", spouse="A", mother="ZZ", father="A")])
    assert list(G.nodes) == ["A"]
    assert G.number_of_edges() == 0


def test_build_graph_first_duplicate_wins():
    G = build_graph([person("A", 1), person("A", 3)])
    assert G.number_of_nodes() == 1
    assert G.nodes["A"]["generation"] == 1


def test_validate_graph_clean_family():
    assert validate_graph(build_graph(family())) == []


def test_validate_graph_finds_problems():
    records = [
        person("P", 2, dob="1990-01-01", dod="1980-01-01", gender="F"),
        person("C", 1, father="P"),
        person("Y", 1, gender="M"),
        person("Z", 2, mother="Y"),
    ]
    warnings = validate_graph(build_graph(records))
    assert warnings == [
        "Misplaced: C (generation 1) is not below parent P (generation 2)",
        "Mismatch: P is recorded as the father of C but is coded female",
        "Mismatch: Y is recorded as the mother of Z but is coded male",
        "Impossible: P died in 1980, before birth in 1990",
    ]


def test_validate_graph_parent_loop_is_misplaced():
    records = [person("A", 1, father="B"), person("B", 2, father="A")]
    warnings = validate_graph(build_graph(records))
    assert "Misplaced: A (generation 1) is not below parent B (generation 2)" in warnings
    assert "Misplaced: B (generation 2) is not below parent A (generation 1)" not in warnings
    assert len([w for w in warnings if w.startswith("Misplaced")]) == 1


def test_validate_spouse_links():
    records = [
        person("A", 1, spouse="A"),
        person("B", 1, spouse="ZZ"),
        person("C", 1, spouse="D"),
        person("D", 1),
        person("E", 1, spouse="F"),
        person("F", 2, spouse="E"),
        person("E", 1),
    ]
    warnings = validate_spouse_links(records)
    assert "Duplicate person id E: later record ignored for lookups" in warnings
    assert "Invalid: A is recorded as their own spouse" in warnings
    assert "Dangling: spouse ZZ of B not found" in warnings
    assert "One-sided: C names D as spouse, but D names nobody" in warnings
    assert any(w.startswith("Unpaired: E (generation 1)") for w in warnings)
    assert any(w.startswith("Unpaired: F (generation 2)") for w in warnings)


def test_validate_spouse_links_clean():
    assert validate_spouse_links(family()) == []
