# forum/api/votes/schemas.py
from marshmallow import Schema, fields


class VoteResponseSchema(Schema):
    """POST /post/{post_id}/upvote|downvote 응답"""
    upvotes = fields.Int(required=True)
    downvotes = fields.Int(required=True)
    user_vote = fields.Str(data_key='userVote', allow_none=True)
