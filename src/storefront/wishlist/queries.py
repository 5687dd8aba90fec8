from protean.utils.globals import current_domain

from storefront.wishlist.wishlist import Wishlist


def wishlist_snapshot(user_id) -> list[dict]:
    wishlist = current_domain.repository_for(Wishlist).for_user(user_id)
    return [entry.as_item() for entry in wishlist.ordered_entries()] if wishlist else []
