# forum/api/comments/schemas.py
from marshmallow import Schema, fields, validate, EXCLUDE

from forum.api.posts.schemas import AuthorSchema  # 작성자 정보는 게시글 스키마의 것을 재사용


class CommentCreateSchema(Schema):
    """
    POST /comment
    parentCommentId가 없으면 게시글의 최상위 댓글, 있으면 해당 댓글의 답글로 생성됩니다.
    """
    class Meta:
        unknown = EXCLUDE

    post_id = fields.Str(required=True, data_key='postId')
    content = fields.Str(required=True, validate=validate.Length(min=1, max=5000, error="댓글은 1~5000자 사이여야 합니다."))
    parent_comment_id = fields.Str(data_key='parentCommentId', allow_none=True, load_default=None)


class CommentUpdateSchema(Schema):
    """PUT /comment/{comment_id}"""
    class Meta:
        unknown = EXCLUDE

    content = fields.Str(required=True, validate=validate.Length(min=1, max=5000, error="댓글은 1~5000자 사이여야 합니다."))


class CommentResponseSchema(Schema):
    """댓글 하나의 응답 형식. replies는 답글 ID 목록입니다."""
    comment_id = fields.Str(required=True)
    post_id = fields.Str(required=True)
    parent_id = fields.Str(allow_none=True)
    author = fields.Nested(AuthorSchema, allow_none=True)
    content = fields.Str(required=True)
    replies = fields.List(fields.Str())
    is_edited = fields.Bool(data_key='isEdited')
    created_at = fields.DateTime()
    updated_at = fields.DateTime()


class CommentTreeSchema(CommentResponseSchema):
    """게시글 상세 화면용 중첩 댓글. replies에 답글 객체가 재귀적으로 들어갑니다."""
    replies = fields.List(fields.Nested(lambda: CommentTreeSchema()))
