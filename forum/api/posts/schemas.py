# forum/api/posts/schemas.py
from marshmallow import Schema, fields, validate, validates_schema, ValidationError, EXCLUDE


# --- 재사용을 위한 중첩 스키마 ---
class AuthorSchema(Schema):
    """게시글/댓글 응답에 포함될 작성자 정보 스키마."""
    user_id = fields.Str(required=True)
    username = fields.Str(required=True)
    profile_picture_url = fields.Str(allow_none=True)


# --- API 요청/응답 스키마 ---

class PostCreateSchema(Schema):
    """POST /post 요청 본문의 유효성을 검사합니다."""
    class Meta:
        unknown = EXCLUDE

    title = fields.Str(required=True, validate=validate.Length(min=1, max=200, error="제목은 1~200자 사이여야 합니다."))
    content = fields.Str(required=True, validate=validate.Length(min=1, error="내용을 입력해주세요."))
    tags = fields.List(fields.Str(validate=validate.Length(max=50)), load_default=list)


class PostUpdateSchema(Schema):
    """PUT /post/{post_id} 요청 본문. 전달된 필드만 수정합니다."""
    class Meta:
        unknown = EXCLUDE

    title = fields.Str(validate=validate.Length(min=1, max=200, error="제목은 1~200자 사이여야 합니다."))
    content = fields.Str(validate=validate.Length(min=1, error="내용을 입력해주세요."))
    tags = fields.List(fields.Str(validate=validate.Length(max=50)))

    @validates_schema
    def validate_not_empty(self, data, **kwargs):
        if not data:
            raise ValidationError("수정할 필드가 하나 이상 필요합니다.")


class PostResponseSchema(Schema):
    """
    게시글 정보 응답을 위한 최종 JSON 형식을 정의합니다.
    upvotes/downvotes는 투표자 목록이 아닌 개수로 내려갑니다.
    """
    post_id = fields.Str(dump_only=True)
    author = fields.Nested(AuthorSchema, allow_none=True)
    title = fields.Str(required=True)
    content = fields.Str(required=True)
    tags = fields.List(fields.Str())
    image = fields.Str(allow_none=True)
    upvotes = fields.Int(attribute='upvote_count')
    downvotes = fields.Int(attribute='downvote_count')
    comment_count = fields.Int()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()

    # Viewer 기준으로 서비스 로직에서 채워주는 응답 전용 필드
    user_vote = fields.Str(data_key='userVote', allow_none=True, dump_only=True)
    is_bookmarked = fields.Bool(data_key='isBookmarked', dump_only=True, dump_default=False)
