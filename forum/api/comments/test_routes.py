# forum/api/comments/test_routes.py


def test_create_comment_requires_login(client, alice, seed_post):
    seed_post('p1', alice.user_id)
    response = client.post('/comment', json={'postId': 'p1', 'content': 'hi'})
    assert response.status_code == 401


def test_create_comment_requires_post_id(client, bob, auth_headers):
    response = client.post('/comment', json={'content': 'hi'}, headers=auth_headers(bob))
    assert response.status_code == 400
    assert 'postId' in response.get_json()['details']


def test_create_comment_on_missing_post(client, bob, auth_headers):
    response = client.post('/comment', json={'postId': 'missing', 'content': 'hi'}, headers=auth_headers(bob))
    assert response.status_code == 404


def test_create_and_fetch_comment(client, alice, bob, auth_headers, seed_post):
    seed_post('p1', alice.user_id)
    response = client.post('/comment', json={'postId': 'p1', 'content': '<b>hi</b> <u>there</u>'},
                           headers=auth_headers(bob))
    assert response.status_code == 201
    body = response.get_json()
    assert body['success'] is True
    comment = body['comment']
    assert comment['content'] == 'hi <u>there</u>'
    assert comment['author']['username'] == 'bob'
    assert comment['isEdited'] is False

    fetched = client.get(f"/comment/{comment['comment_id']}").get_json()
    assert fetched['comment_id'] == comment['comment_id']


def test_edit_comment_by_other_user_is_forbidden(client, alice, bob, auth_headers, seed_post):
    seed_post('p1', alice.user_id)
    comment_id = client.post('/comment', json={'postId': 'p1', 'content': 'mine'},
                             headers=auth_headers(bob)).get_json()['comment']['comment_id']

    forbidden = client.put(f'/comment/{comment_id}', json={'content': 'x'}, headers=auth_headers(alice))
    assert forbidden.status_code == 403
    assert forbidden.get_json()['error'] == 'FORBIDDEN'

    edited = client.put(f'/comment/{comment_id}', json={'content': 'edited'}, headers=auth_headers(bob))
    assert edited.status_code == 200
    assert edited.get_json()['comment']['isEdited'] is True


def test_delete_comment(client, alice, bob, auth_headers, seed_post):
    seed_post('p1', alice.user_id)
    comment_id = client.post('/comment', json={'postId': 'p1', 'content': 'bye'},
                             headers=auth_headers(bob)).get_json()['comment']['comment_id']

    response = client.delete(f'/comment/{comment_id}', headers=auth_headers(bob))
    assert response.status_code == 200
    assert response.get_json() == {'success': True, 'message': '댓글이 삭제되었습니다.'}
    assert client.get(f'/comment/{comment_id}').status_code == 404


def test_post_comment_tree_route(client, alice, bob, auth_headers, seed_post):
    seed_post('p1', alice.user_id)
    parent_id = client.post('/comment', json={'postId': 'p1', 'content': 'q'},
                            headers=auth_headers(bob)).get_json()['comment']['comment_id']
    client.post('/comment', json={'postId': 'p1', 'content': 'a', 'parentCommentId': parent_id},
                headers=auth_headers(alice))

    tree = client.get('/post/p1/comments').get_json()['comments']
    assert len(tree) == 1
    assert tree[0]['content'] == 'q'
    assert [reply['content'] for reply in tree[0]['replies']] == ['a']
    assert client.get('/post/missing/comments').status_code == 404
