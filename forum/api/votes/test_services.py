# forum/api/votes/test_services.py
import pytest

from forum.core.errors import NotFoundError
from forum.models.post import VoteDirection
from forum.services.document_store import POSTS

UP, DOWN = VoteDirection.UP, VoteDirection.DOWN


@pytest.fixture
def vote_service(services):
    return services['votes']


def _voters(store, post_id):
    doc = store.find_by_id(POSTS, post_id)
    return doc['upvotes'], doc['downvotes']


def test_user_is_in_at_most_one_vote_list(vote_service, store, seed_post):
    """어떤 순서로 투표하더라도 한 사용자는 두 목록 중 최대 한 곳에만 있어야 한다"""
    seed_post('p1', 'author')
    for direction in [UP, DOWN, DOWN, UP, UP, DOWN, UP, DOWN, UP]:
        vote_service.apply_vote('p1', 'u1', direction)
        upvotes, downvotes = _voters(store, 'p1')
        assert not ('u1' in upvotes and 'u1' in downvotes)
        assert upvotes.count('u1') <= 1
        assert downvotes.count('u1') <= 1


def test_same_direction_twice_retracts_vote(vote_service, seed_post):
    seed_post('p1', 'author', upvotes=['x'], downvotes=['y'])

    first = vote_service.apply_vote('p1', 'u1', UP)
    assert (first.upvotes, first.downvotes, first.user_vote) == (2, 1, 'upvote')

    second = vote_service.apply_vote('p1', 'u1', UP)
    assert (second.upvotes, second.downvotes, second.user_vote) == (1, 1, None)


def test_switching_vote_moves_user_to_opposite_list(vote_service, store, seed_post):
    seed_post('p1', 'author')
    before = vote_service.apply_vote('p1', 'u1', UP)
    assert before.user_vote == 'upvote'

    after = vote_service.apply_vote('p1', 'u1', DOWN)
    assert after.user_vote == 'downvote'
    assert after.upvotes == before.upvotes - 1
    assert after.downvotes == before.downvotes + 1
    assert _voters(store, 'p1') == ([], ['u1'])


def test_switching_from_existing_downvote(vote_service, store, seed_post):
    seed_post('p1', 'author', upvotes=['x'], downvotes=['u1', 'y'])
    result = vote_service.apply_vote('p1', 'u1', UP)
    assert (result.upvotes, result.downvotes, result.user_vote) == (2, 1, 'upvote')
    assert _voters(store, 'p1') == (['x', 'u1'], ['y'])


def test_other_users_votes_are_untouched(vote_service, store, seed_post):
    seed_post('p1', 'author', upvotes=['a', 'b'], downvotes=['c'])
    vote_service.apply_vote('p1', 'u1', DOWN)
    vote_service.apply_vote('p1', 'u1', DOWN)
    assert _voters(store, 'p1') == (['a', 'b'], ['c'])


def test_vote_on_missing_post_raises_not_found(vote_service):
    with pytest.raises(NotFoundError):
        vote_service.apply_vote('missing', 'u1', UP)
