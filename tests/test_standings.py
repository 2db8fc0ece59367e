from leaguestats.standings import build_standings, export_standings_to_csv, format_nrr
from leaguestats.stats import aggregate, classify

from tests.factories import innings, make_match


def _summary(team_id, matches):
    return aggregate(team_id, [classify(match, team_id) for match in matches])


def test_points_then_nrr_then_wins():
    big_win = make_match(
        "m1", "A", "B", winner_id="A",
        team1_innings=[innings("A", 200, 2, 20.0)],
        team2_innings=[innings("B", 100, 10, 20.0)],
    )
    close_win = make_match(
        "m2", "C", "D", winner_id="C",
        team1_innings=[innings("C", 151, 5, 20.0)],
        team2_innings=[innings("D", 150, 8, 20.0)],
    )
    walkover = make_match("m3", "E", "F", winner_id="E")

    summaries = [_summary(team_id, [big_win, close_win, walkover]) for team_id in "BCDEFA"]
    rows = build_standings(summaries, team_names={"A": "Alpha"})

    assert [row.team_id for row in rows] == ["A", "C", "E", "D", "B", "F"]
    assert [row.position for row in rows] == [1, 2, 3, 4, 5, 6]
    assert rows[0].team_name == "Alpha"
    assert rows[1].team_name == "C"
    assert rows[2].net_run_rate is None


def test_csv_marks_withheld_nrr():
    walkover = make_match("m1", "E", "F", winner_id="E")
    rows = build_standings([_summary("E", [walkover])])
    lines = export_standings_to_csv(rows).strip().splitlines()
    assert lines[0] == "Pos,Team,P,W,L,D,NR,Pts,NRR"
    assert lines[1] == "1,E,1,1,0,0,0,2,-"


def test_format_nrr():
    assert format_nrr(0.5) == "+0.500"
    assert format_nrr(-1.25) == "-1.250"
    assert format_nrr(None) == "-"
