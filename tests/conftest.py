"""Shared fixtures for settlement tests."""

import logging

import pytest

from bloodsheet.models import MatchPlayer
from builders import build_course


@pytest.fixture
def course():
    return build_course()


@pytest.fixture
def singles_players():
    return [
        MatchPlayer(id='p1', display_name='Alice', handicap_index=0.0, team='A'),
        MatchPlayer(id='p2', display_name='Bob', handicap_index=0.0, team='B'),
    ]


@pytest.fixture
def fourball_players():
    return [
        MatchPlayer(id='p1', display_name='Alice', handicap_index=10.0, team='A'),
        MatchPlayer(id='p2', display_name='Bob', handicap_index=12.0, team='A'),
        MatchPlayer(id='p3', display_name='Cara', handicap_index=5.0, team='B'),
        MatchPlayer(id='p4', display_name='Dev', handicap_index=6.0, team='B'),
    ]


@pytest.fixture
def skins_players():
    return [
        MatchPlayer(id='p1', display_name='Alice', handicap_index=0.0, team='A'),
        MatchPlayer(id='p2', display_name='Bob', handicap_index=0.0, team='A'),
        MatchPlayer(id='p3', display_name='Cara', handicap_index=0.0, team='A'),
    ]


@pytest.fixture
def clean_logger():
    """Detach any handlers setup_logging added to the bloodsheet logger."""
    yield logging.getLogger('bloodsheet')
    logger = logging.getLogger('bloodsheet')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
