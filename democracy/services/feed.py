from democracy.extensions import db
from democracy.models import FeedItem


def post_feed_item(content, user_id=None):
    item = FeedItem(user_id=user_id, content=content)
    db.session.add(item)
    return item
