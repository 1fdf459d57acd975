from wair.schemas.wardrobe import WardrobeItem


def item(id, category, subcategory, color, material=None, image=None, formality=5):
    return WardrobeItem(
        id=id,
        category=category,
        subcategory=subcategory,
        color=color,
        material=material,
        image=image,
        formality=formality,
    )


def black_tee_wardrobe():
    return [item("1", "Top", "T-Shirt", "Black", "Cotton")]


def date_night_wardrobe():
    return [
        item("dress-1", "Dress", "Dress", "Black", "Silk"),
        item("heels-1", "Shoes", "Heels", "Black", "Patent Leather"),
    ]


def mixed_wardrobe():
    return [
        item("w1", "Top", "White Blouse", "White", "Cotton"),
        item("w2", "Top", "Black T-Shirt", "Black", "Cotton"),
        item("w3", "Bottom", "Blue Jeans", "Blue", "Denim"),
        item("w4", "Outerwear", "Leather Jacket", "Black", "Leather"),
        item("w5", "Shoes", "Sneakers", "Red", "Mesh"),
        item("w6", "Top", "Tank Top", "Black", "Cotton"),
    ]
