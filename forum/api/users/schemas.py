# forum/api/users/schemas.py
from marshmallow import Schema, fields, validate, validates_schema, ValidationError, EXCLUDE


class ProfilePostSchema(Schema):
    """프로필 화면에 나열되는 게시글 요약"""
    post_id = fields.Str(required=True)
    title = fields.Str(required=True)
    tags = fields.List(fields.Str())
    upvotes = fields.Int(attribute='upvote_count')
    comment_count = fields.Int()
    created_at = fields.DateTime()


class UserPublicResponseSchema(Schema):
    """
    GET /profile/{username}
    다른 사용자의 프로필 정보를 응답할 때 사용하는 스키마.
    이메일, 비밀번호 해시, 북마크 목록 같은 정보는 제외합니다.
    """
    user_id = fields.Str(required=True, dump_only=True)
    username = fields.Str(required=True)
    profile_picture_url = fields.Str(allow_none=True)
    country = fields.Str()
    about_me = fields.Str(data_key='aboutMe')
    saved_tags = fields.List(fields.Str(), data_key='savedTags')
    number_of_posts = fields.Int(data_key='numberOfPosts')
    post_count = fields.Int(data_key='postCount')
    comment_count = fields.Int(data_key='commentCount')
    friends = fields.List(fields.Str())
    posts = fields.List(fields.Nested(ProfilePostSchema))
    created_at = fields.DateTime()


class ProfileUpdateSchema(Schema):
    """
    PATCH /profile
    비밀번호를 바꾸려면 currentPassword, newPassword, confirmNewPassword가 모두 필요합니다.
    """
    class Meta:
        unknown = EXCLUDE

    username = fields.Str(validate=validate.Length(min=3, max=30, error="사용자 이름은 3~30자 사이여야 합니다."))
    email = fields.Email(error_messages={"invalid": "올바른 이메일 형식이 아닙니다."})
    country = fields.Str(validate=validate.Length(max=60))
    about_me = fields.Str(data_key='aboutMe', validate=validate.Length(max=1000))
    saved_tags = fields.List(fields.Str(validate=validate.Length(max=50)), data_key='savedTags')
    current_password = fields.Str(data_key='currentPassword', load_only=True)
    new_password = fields.Str(data_key='newPassword', load_only=True,
                              validate=validate.Length(min=8, error="비밀번호는 8자 이상이어야 합니다."))
    confirm_new_password = fields.Str(data_key='confirmNewPassword', load_only=True)

    @validates_schema
    def validate_password_change(self, data, **kwargs):
        if not data.get('new_password'):
            return
        if not data.get('current_password'):
            raise ValidationError("현재 비밀번호를 입력해주세요.", 'currentPassword')
        if data.get('new_password') != data.get('confirm_new_password'):
            raise ValidationError("새 비밀번호가 일치하지 않습니다.", 'confirmNewPassword')
