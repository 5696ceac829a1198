# forum/api/auth/schemas.py
from marshmallow import Schema, fields, validate, validates_schema, ValidationError, EXCLUDE


class SignupSchema(Schema):
    """POST /auth/signup 요청 본문의 유효성을 검사합니다."""
    class Meta:
        unknown = EXCLUDE

    username = fields.Str(required=True, validate=validate.Length(min=3, max=30, error="사용자 이름은 3~30자 사이여야 합니다."))
    email = fields.Email(required=True, error_messages={"invalid": "올바른 이메일 형식이 아닙니다."})
    password = fields.Str(required=True, load_only=True, validate=validate.Length(min=8, error="비밀번호는 8자 이상이어야 합니다."))
    confirm_password = fields.Str(required=True, load_only=True, data_key='confirmPassword')

    @validates_schema
    def validate_password_match(self, data, **kwargs):
        if data.get('password') != data.get('confirm_password'):
            raise ValidationError("비밀번호가 일치하지 않습니다.", 'confirmPassword')


class LoginSchema(Schema):
    """POST /auth/login 요청 본문"""
    class Meta:
        unknown = EXCLUDE

    username = fields.Str(required=True, validate=validate.Length(min=1))
    password = fields.Str(required=True, load_only=True, validate=validate.Length(min=1))
    remember_me = fields.Bool(data_key='rememberMe', load_default=False)


class ViewerResponseSchema(Schema):
    """GET /auth/me 응답"""
    user_id = fields.Str(required=True)
    username = fields.Str(required=True)
    profile_picture_url = fields.Str(allow_none=True)
