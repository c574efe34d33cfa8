from datetime import date

from graph import build_graph
from models import PersonRecord
from plotting import build_tree_dot, plot_tree
from tree import build_tree


def person(pid, gen, gender="M", spouse=None, mother=None, father=None, dod=None):
    return PersonRecord(
        person_id=pid,
        generation=gen,
        first_name=pid.title(),
        gender=gender,
        spouse_id=spouse,
        mother_id=mother,
        father_id=father,
        birth_date="1950-01-01",
        birth_date_string="1950-01-01",
        death_date=dod,
        death_date_string=dod,
    )


def records():
    return [
        person("dad", 1, spouse="mom", dod="2010-05-05"),
        person("mom", 1, gender="F", spouse="dad"),
        person("son", 2, mother="mom", father="dad", spouse="wife"),
        person("wife", 2, gender="F", spouse="son"),
        person("grandkid", 3, mother="wife", father="son"),
    ]


def edge_pairs(P):
    return {(e.get_source(), e.get_destination()) for e in P.get_edges()}


def test_one_rank_per_generation():
    result = build_tree(records(), today=date(2026, 1, 1))
    P = build_tree_dot(result)

    subgraphs = P.get_subgraphs()
    assert [sg.get_name() for sg in subgraphs] == [
        "generation_1",
        "generation_2",
        "generation_3",
    ]
    assert all(sg.get("rank") == "same" for sg in subgraphs)
    assert [n.get_name() for n in subgraphs[1].get_nodes()] == ["son"]
    assert P.get_edges() == []


def test_parent_edges_connect_display_units():
    recs = records()
    result = build_tree(recs, today=date(2026, 1, 1))
    P = build_tree_dot(result, build_graph(recs))

    # Both parents of "son" collapse into the "dad" unit; "wife" lives in the "son" unit
    assert edge_pairs(P) == {("dad", "son"), ("son", "grandkid")}


def test_labels_show_age_spouse_and_death():
    result = build_tree(records(), today=date(2026, 1, 1))
    P = build_tree_dot(result)

    dad_label = P.get_node("dad")[0].get("label")
    assert "Dad †" in dad_label
    assert "60 yrs" in dad_label
    assert "♥ Mom" in dad_label


def test_plot_tree_writes_dot_source(tmp_path):
    result = build_tree(records(), today=date(2026, 1, 1))
    out = tmp_path / "tree.dot"
    plot_tree(result, None, out)

    text = out.read_text(encoding="utf-8")
    assert "digraph" in text
    assert "rank=same" in text


def test_repeated_id_is_drawn_in_one_rank_only():
    recs = [person("twin", 1), person("other", 2), person("twin", 3)]
    result = build_tree(recs, today=date(2026, 1, 1))
    assert [[m.id for m in b.members] for b in result.generations] == [
        ["twin"],
        ["other"],
        ["twin"],
    ]

    P = build_tree_dot(result, build_graph(recs))
    ranks = [[n.get_name() for n in sg.get_nodes()] for sg in P.get_subgraphs()]
    assert ranks == [["twin"], ["other"], []]
    assert len(P.get_node("twin")) == 1
