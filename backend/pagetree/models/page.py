from sqlalchemy import event
from pagetree.extensions import db
from pagetree.domain.slug import resolve_slug
from .base import BaseModel

class Page(BaseModel):
    __tablename__ = 'pages'

    title = db.Column(db.String(200), nullable=False)
    menu_title = db.Column(db.String(200), nullable=True)
    browser_title = db.Column(db.String(200), nullable=True)
    custom_slug = db.Column(db.String(200), nullable=True)
    slug = db.Column(db.String(255), nullable=False, index=True)

    parent_id = db.Column(db.String(36), db.ForeignKey("pages.id"), nullable=True, index=True)
    position = db.Column(db.Integer, nullable=False, default=0, index=True)

    draft = db.Column(db.Boolean, nullable=False, default=False, index=True)
    show_in_menu = db.Column(db.Boolean, nullable=False, default=True)
    skip_to_first_child = db.Column(db.Boolean, nullable=False, default=False)
    link_url = db.Column(db.String(2048), nullable=True)

    __table_args__ = (
        db.Index("ix_pages_parent_position", "parent_id", "position"),
    )

    # Children ordered the same way the menu orders siblings
    children = db.relationship(
        "Page",
        back_populates="parent",
        order_by="Page.position",
    )
    parent = db.relationship("Page", back_populates="children", remote_side="Page.id")

    @property
    def is_home(self):
        return self.link_url == "/"

    def __repr__(self):
        return f"<Page {self.slug!r} position={self.position}>"


@event.listens_for(Page, 'before_insert')
@event.listens_for(Page, 'before_update')
def ensure_slug(mapper, connection, target):
    # Services assign collision-free slugs; this only covers bare ORM writes.
    if not target.slug:
        target.slug = resolve_slug(target)
