"""Shared fixtures for q3scoreboard tests."""

import io
import os

import pytest

# Three matches: the first has no kills, the second has world kills and a
# rename, the third never gets a ShutdownGame line.
SAMPLE_LOG = r"""  0:00 ------------------------------------------------------------
  0:00 InitGame: \sv_floodProtect\1\sv_maxPing\0\sv_minPing\0\sv_maxRate\10000\sv_hostname\Code Miner Server\g_gametype\0
 15:00 Exit: Timelimit hit.
 20:34 ClientConnect: 2
 20:34 ClientUserinfoChanged: 2 n\Isgalamido\t\0\model\xian/default\hmodel\xian/default\g_redteam\\g_blueteam\\c1\4\c2\5\hc\100\w\0\l\0\tt\0\tl\0
 20:37 ClientUserinfoChanged: 2 n\Isgalamido\t\0\model\uriel/zael\hmodel\uriel/zael\g_redteam\\g_blueteam\\c1\5\c2\5\hc\100\w\0\l\0\tt\0\tl\0
 20:37 ClientBegin: 2
 20:37 ShutdownGame:
 20:37 ------------------------------------------------------------
 20:37 ------------------------------------------------------------
  0:00 InitGame: \sv_floodProtect\1\sv_maxPing\0\sv_minPing\0\sv_maxRate\10000\sv_hostname\Code Miner Server\g_gametype\0
  0:25 ClientConnect: 2
  0:25 ClientUserinfoChanged: 2 n\Dono da Bola\t\0\model\sarge/krusade\hmodel\sarge/krusade\g_redteam\\g_blueteam\\c1\5\c2\5\hc\95\w\0\l\0\tt\0\tl\0
  0:27 ClientUserinfoChanged: 2 n\Mocinha\t\0\model\sarge\hmodel\sarge\g_redteam\\g_blueteam\\c1\4\c2\5\hc\95\w\0\l\0\tt\0\tl\0
  0:27 ClientBegin: 2
  0:29 Item: 2 weapon_rocketlauncher
  0:35 ClientConnect: 3
  0:35 ClientUserinfoChanged: 3 n\Isgalamido\t\0\model\xian/default\hmodel\xian/default\g_redteam\\g_blueteam\\c1\4\c2\5\hc\100\w\0\l\0\tt\0\tl\0
  0:36 ClientBegin: 3
  1:02 Kill: 3 2 6: Isgalamido killed Mocinha by MOD_ROCKET
  1:08 Kill: 1022 3 22: <world> killed Isgalamido by MOD_TRIGGER_HURT
  1:26 Kill: 1022 2 19: <world> killed Mocinha by MOD_FALLING
  1:30 ClientUserinfoChanged: 2 n\Zeh\t\0\model\sarge\hmodel\sarge\g_redteam\\g_blueteam\\c1\4\c2\5\hc\95\w\0\l\0\tt\0\tl\0
  1:32 Kill: 3 2 7: Isgalamido killed Zeh by MOD_ROCKET_SPLASH
  1:47 ShutdownGame:
  1:47 ------------------------------------------------------------
  0:00 InitGame: \sv_floodProtect\1\sv_maxPing\0\sv_minPing\0\sv_maxRate\10000\sv_hostname\Code Miner Server\g_gametype\0
  0:10 ClientConnect: 4
  0:10 ClientUserinfoChanged: 4 n\Assasinu Credi\t\0\model\sarge\hmodel\sarge\g_redteam\\g_blueteam\\c1\4\c2\5\hc\100\w\0\l\0\tt\0\tl\0
  0:11 ClientBegin: 4
  0:40 Kill: 1022 4 22: <world> killed Assasinu Credi by MOD_TRIGGER_HURT
  0:45 ClientDisconnect: 4
"""

EXPECTED_GAME_1 = {
    "game_1": {
        "total_kills": 0,
        "players": ["Isgalamido"],
        "scores": [["Isgalamido", 0]],
        "death_causes": {},
    }
}

EXPECTED_GAME_2 = {
    "game_2": {
        "total_kills": 4,
        "players": ["Zeh", "Isgalamido"],
        "scores": [["Zeh", -1], ["Isgalamido", 1]],
        "death_causes": {
            "MOD_FALLING": 1,
            "MOD_ROCKET": 1,
            "MOD_ROCKET_SPLASH": 1,
            "MOD_TRIGGER_HURT": 1,
        },
    }
}

EXPECTED_GAME_3 = {
    "game_3": {
        "total_kills": 1,
        "players": [],
        "scores": [],
        "death_causes": {"MOD_TRIGGER_HURT": 1},
    }
}


@pytest.fixture
def sample_log_lines():
    """Lines of the sample log, without line endings."""
    return SAMPLE_LOG.splitlines()


@pytest.fixture
def sample_log_path(tmp_path):
    """Sample log written to a temporary file."""
    path = tmp_path / "games.log"
    path.write_text(SAMPLE_LOG, encoding="utf-8")
    return path


@pytest.fixture
def sink():
    """In-memory output sink for SummaryProcessor."""
    return io.StringIO()


@pytest.fixture
def sample_log_text():
    """The raw sample log."""
    return SAMPLE_LOG


@pytest.fixture
def expected_games():
    """Scoreboards of the three sample log matches, in output order."""
    return [EXPECTED_GAME_1, EXPECTED_GAME_2, EXPECTED_GAME_3]


@pytest.fixture
def isolated_config(monkeypatch, tmp_path):
    """Keep the real environment, home and working directory out of config loading."""
    from q3scoreboard.core.config import reset_config

    for key in list(os.environ):
        if key.startswith("Q3SCOREBOARD_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / ".config"))
    reset_config()
    yield tmp_path
    reset_config()
