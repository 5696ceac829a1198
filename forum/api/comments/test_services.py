# forum/api/comments/test_services.py
import pytest

from forum.core.errors import NotFoundError, ForbiddenError, InputValidationError
from forum.services.document_store import COMMENTS, POSTS, USERS


@pytest.fixture
def comment_service(services):
    return services['comments']


@pytest.fixture
def post(seed_post, alice):
    return seed_post('p1', alice.user_id)


def _doc(store, collection, doc_id):
    return store.find_by_id(collection, doc_id)


def test_create_top_level_comment_links_post_and_author(comment_service, store, post, bob):
    comment = comment_service.create_comment('p1', bob.user_id, 'nice post')

    assert comment['parent_id'] is None
    assert comment['author']['username'] == 'bob'
    assert _doc(store, POSTS, 'p1')['comments'] == [comment['comment_id']]
    author = _doc(store, USERS, bob.user_id)
    assert author['comments'] == [comment['comment_id']]
    assert author['comment_count'] == 1


def test_reply_is_linked_to_parent_not_post(comment_service, store, post, alice, bob):
    parent = comment_service.create_comment('p1', bob.user_id, 'nice post')
    reply = comment_service.create_comment('p1', alice.user_id, 'thanks', parent['comment_id'])

    assert reply['parent_id'] == parent['comment_id']
    assert _doc(store, COMMENTS, parent['comment_id'])['replies'] == [reply['comment_id']]
    assert _doc(store, POSTS, 'p1')['comments'] == [parent['comment_id']]


def test_content_is_sanitized_to_inline_tags(comment_service, post, bob):
    comment = comment_service.create_comment(
        'p1', bob.user_id, '<p onclick="x()">hi <strong>there</strong></p><script>alert(1)</script><h1>big</h1>'
    )
    assert '<p>hi <strong>there</strong></p>' in comment['content']
    assert '<script' not in comment['content']
    assert '<h1>' not in comment['content']
    assert 'onclick' not in comment['content']


def test_content_empty_after_sanitizing_is_rejected(comment_service, store, post, bob):
    with pytest.raises(InputValidationError):
        comment_service.create_comment('p1', bob.user_id, '<img src="x.png">')
    assert store.find(COMMENTS) == []


def test_missing_post_raises_not_found(comment_service, bob):
    with pytest.raises(NotFoundError):
        comment_service.create_comment('missing', bob.user_id, 'hello')


def test_missing_parent_raises_not_found_and_saves_nothing(comment_service, store, post, bob):
    with pytest.raises(NotFoundError):
        comment_service.create_comment('p1', bob.user_id, 'hello', 'missing-parent')
    assert store.find(COMMENTS) == []
    assert _doc(store, POSTS, 'p1')['comments'] == []


def test_reply_to_comment_of_another_post_is_rejected(comment_service, seed_post, post, alice, bob):
    seed_post('p2', alice.user_id)
    other = comment_service.create_comment('p2', bob.user_id, 'elsewhere')
    with pytest.raises(InputValidationError):
        comment_service.create_comment('p1', bob.user_id, 'hello', other['comment_id'])


def test_edit_by_author_marks_edited(comment_service, store, post, bob):
    comment = comment_service.create_comment('p1', bob.user_id, 'first')
    edited = comment_service.edit_comment(comment['comment_id'], bob.user_id, '<em>second</em><div>x</div>')

    assert edited['is_edited'] is True
    assert edited['content'] == '<em>second</em>x'
    assert _doc(store, COMMENTS, comment['comment_id'])['is_edited'] is True


def test_edit_by_other_user_is_forbidden(comment_service, post, alice, bob):
    comment = comment_service.create_comment('p1', bob.user_id, 'first')
    with pytest.raises(ForbiddenError):
        comment_service.edit_comment(comment['comment_id'], alice.user_id, 'hijack')


def test_edit_missing_comment_raises_not_found(comment_service, bob):
    with pytest.raises(NotFoundError):
        comment_service.edit_comment('missing', bob.user_id, 'text')


def test_delete_top_level_comment_unlinks_everywhere(comment_service, store, post, bob):
    comment = comment_service.create_comment('p1', bob.user_id, 'bye')
    comment_service.delete_comment(comment['comment_id'], bob.user_id)

    assert _doc(store, POSTS, 'p1')['comments'] == []
    assert _doc(store, COMMENTS, comment['comment_id']) is None
    author = _doc(store, USERS, bob.user_id)
    assert author['comments'] == []
    assert author['comment_count'] == 0


def test_delete_reply_keeps_its_own_replies(comment_service, store, post, alice, bob):
    top = comment_service.create_comment('p1', bob.user_id, 'top')
    reply = comment_service.create_comment('p1', alice.user_id, 'reply', top['comment_id'])
    nested = comment_service.create_comment('p1', bob.user_id, 'nested', reply['comment_id'])

    comment_service.delete_comment(reply['comment_id'], alice.user_id)

    assert _doc(store, COMMENTS, top['comment_id'])['replies'] == []
    assert _doc(store, POSTS, 'p1')['comments'] == [top['comment_id']]
    orphan = _doc(store, COMMENTS, nested['comment_id'])
    assert orphan is not None
    assert orphan['parent_id'] == reply['comment_id']


def test_delete_reply_whose_parent_is_gone(comment_service, store, post, alice, bob):
    top = comment_service.create_comment('p1', bob.user_id, 'top')
    reply = comment_service.create_comment('p1', alice.user_id, 'reply', top['comment_id'])
    comment_service.delete_comment(top['comment_id'], bob.user_id)

    comment_service.delete_comment(reply['comment_id'], alice.user_id)
    assert store.find(COMMENTS) == []


def test_delete_by_other_user_is_forbidden(comment_service, store, post, alice, bob):
    comment = comment_service.create_comment('p1', bob.user_id, 'mine')
    with pytest.raises(ForbiddenError):
        comment_service.delete_comment(comment['comment_id'], alice.user_id)
    assert _doc(store, COMMENTS, comment['comment_id']) is not None


def test_comment_tree_nests_replies_and_skips_orphans(comment_service, services, post, alice, bob):
    first = comment_service.create_comment('p1', bob.user_id, 'first')
    reply = comment_service.create_comment('p1', alice.user_id, 'reply', first['comment_id'])
    nested = comment_service.create_comment('p1', bob.user_id, 'nested', reply['comment_id'])
    second = comment_service.create_comment('p1', alice.user_id, 'second')

    tree = comment_service.get_comment_tree(services['posts'].get_post('p1'))
    assert [node['comment_id'] for node in tree] == [first['comment_id'], second['comment_id']]
    assert tree[0]['replies'][0]['comment_id'] == reply['comment_id']
    assert tree[0]['replies'][0]['replies'][0]['comment_id'] == nested['comment_id']
    assert tree[0]['replies'][0]['author']['username'] == 'alice'

    comment_service.delete_comment(first['comment_id'], bob.user_id)
    tree = comment_service.get_comment_tree(services['posts'].get_post('p1'))
    assert [node['comment_id'] for node in tree] == [second['comment_id']]
    assert comment_service.get_comment(nested['comment_id'])['content'] == 'nested'
