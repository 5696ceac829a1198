# forum/api/feed/schemas.py
from marshmallow import fields

from forum.api.comments.schemas import CommentTreeSchema
from forum.api.posts.schemas import PostResponseSchema


class PostDetailResponseSchema(PostResponseSchema):
    """GET /post/{post_id} 응답. 작성자 여부와 중첩 댓글 트리가 추가됩니다."""
    is_author = fields.Bool(data_key='isAuthor', dump_only=True, dump_default=False)
    comments = fields.List(fields.Nested(CommentTreeSchema), attribute='comment_tree', dump_only=True)
