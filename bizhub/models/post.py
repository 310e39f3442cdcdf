from sqlalchemy_serializer import SerializerMixin
from bizhub.extension import db
from bizhub.utils.helper import utcnow

post_likes = db.Table(
    "post_likes",
    db.Column("post_id", db.Integer, db.ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True),
    db.Column("client_id", db.Integer, db.ForeignKey("clients.id", ondelete="CASCADE"), primary_key=True),
    db.Column("created_at", db.DateTime, default=utcnow),
)

POST_STATUSES = ("draft", "scheduled", "published", "failed")
POST_PLATFORMS = ("facebook", "twitter", "instagram", "linkedin")
MEDIA_TYPES = ("image", "video", "none")


class Post(db.Model):
    __tablename__ = "posts"
    __table_args__ = (
        db.Index("ix_posts_business_status", "business_id", "status"),
        db.Index("ix_posts_user_created", "user_id", "created_at"),
    )

    id = db.Column(db.Integer, primary_key=True)
    business_id = db.Column(db.Integer, db.ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    content = db.Column(db.Text, nullable=False)
    caption = db.Column(db.String(500), default="")
    media_url = db.Column(db.String(500), nullable=True)
    media_type = db.Column(db.String(10), nullable=False, default="none")
    platforms = db.Column(db.JSON, default=list)
    status = db.Column(db.String(20), nullable=False, default="draft")
    scheduled_for = db.Column(db.DateTime, nullable=True)
    tags = db.Column(db.JSON, default=list)
    category = db.Column(db.String(100), default="General")

    # Engagement metrics; counts mirror the likes/comments rows
    likes_count = db.Column(db.Integer, nullable=False, default=0)
    comments_count = db.Column(db.Integer, nullable=False, default=0)
    shares = db.Column(db.Integer, nullable=False, default=0)
    views = db.Column(db.Integer, nullable=False, default=0)
    clicks = db.Column(db.Integer, nullable=False, default=0)

    created_at = db.Column(db.DateTime, default=utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    business = db.relationship("Business", back_populates="posts")
    author = db.relationship("User")
    likes_list = db.relationship("Client", secondary=post_likes)
    comments_list = db.relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="Comment.id",
    )

    @property
    def engagement(self):
        return self.likes_count + self.comments_count + (self.shares or 0)


class Comment(db.Model, SerializerMixin):
    __tablename__ = "post_comments"

    id = db.Column(db.Integer, primary_key=True)
    post_id = db.Column(db.Integer, db.ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    client_id = db.Column(db.Integer, db.ForeignKey("clients.id", ondelete="CASCADE"), nullable=False)
    text = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    serialize_only = ("id", "post_id", "client_id", "text", "created_at")
    datetime_format = "%Y-%m-%dT%H:%M:%S"

    post = db.relationship("Post", back_populates="comments_list")
    client = db.relationship("Client")
