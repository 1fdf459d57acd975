import random
from typing import List, Optional

from wair.schemas.profile import Profile, ProfileAttributes
from wair.schemas.wardrobe import WardrobeItem

# (category, subcategory, color, material, image path under the static root)
DEMO_WARDROBE = [
    ("Top", "White Blouse", "White", "Cotton", "/images/wardrobe/tops/01-white-blouse.jpg"),
    ("Top", "Black T-Shirt", "Black", "Cotton", "/images/wardrobe/tops/02-black-top.jpg"),
    ("Top", "Striped Shirt", "Blue/White", "Cotton", "/images/wardrobe/tops/03-striped-shirt.jpg"),
    ("Top", "Knit Sweater", "Cream", "Wool", "/images/wardrobe/tops/04-sweater.jpg"),
    ("Top", "Tank Top", "White", "Cotton", "/images/wardrobe/tops/05-tank-top.jpg"),
    ("Top", "Silk Blouse", "Pink", "Silk", "/images/wardrobe/tops/06-blouse.jpg"),
    ("Bottom", "Blue Jeans", "Blue", "Denim", "/images/wardrobe/bottoms/01-blue-jeans.jpg"),
    ("Bottom", "Black Pants", "Black", "Cotton", "/images/wardrobe/bottoms/02-black-pants.jpg"),
    ("Bottom", "Midi Skirt", "Brown", "Polyester", "/images/wardrobe/bottoms/03-skirt.jpg"),
    ("Bottom", "Denim Shorts", "Light Blue", "Denim", "/images/wardrobe/bottoms/04-shorts.jpg"),
    ("Bottom", "Tailored Trousers", "Beige", "Wool Blend", "/images/wardrobe/bottoms/05-trousers.jpg"),
    ("Dress", "Red Gown", "Red", "Satin", "/images/wardrobe/dresses/01-black-dress.jpg"),
    ("Dress", "Floral Dress", "Multi", "Cotton", "/images/wardrobe/dresses/02-floral-dress.jpg"),
    ("Dress", "Summer Dress", "Yellow", "Linen", "/images/wardrobe/dresses/03-summer-dress.jpg"),
    ("Dress", "Evening Dress", "Navy", "Silk", "/images/wardrobe/dresses/04-evening-dress.jpg"),
    ("Outerwear", "Blazer", "Grey", "Wool", "/images/wardrobe/outerwear/01-blazer.jpg"),
    ("Outerwear", "Leather Jacket", "Black", "Leather", "/images/wardrobe/outerwear/02-leather-jacket.jpg"),
    ("Outerwear", "Denim Jacket", "Blue", "Denim", "/images/wardrobe/outerwear/03-denim-jacket.jpg"),
    ("Outerwear", "Wool Coat", "Camel", "Wool", "/images/wardrobe/outerwear/04-coat.jpg"),
    ("Shoes", "Sneakers", "Red", "Mesh", "/images/wardrobe/shoes/01-sneakers.jpg"),
    ("Shoes", "Heels", "Black", "Patent Leather", "/images/wardrobe/shoes/02-heels.jpg"),
    ("Shoes", "Ankle Boots", "Brown", "Leather", "/images/wardrobe/shoes/03-boots.jpg"),
    ("Shoes", "Sandals", "Tan", "Leather", "/images/wardrobe/shoes/04-sandals.jpg"),
    ("Accessory", "Handbag", "Red", "Leather", "/images/wardrobe/accessories/01-handbag.jpg"),
    ("Accessory", "Sunglasses", "Black", "Plastic", "/images/wardrobe/accessories/02-sunglasses.jpg"),
    ("Accessory", "Watch", "Silver", "Stainless Steel", "/images/wardrobe/accessories/03-watch.jpg"),
    ("Accessory", "Scarf", "Multi", "Cashmere", "/images/wardrobe/accessories/04-scarf.jpg"),
]

DEMO_GALLERY = [
    "/images/models/model-01.jpg",
    "/images/models/model-02.jpg",
    "/images/models/model-03.jpg",
    "/images/models/model-04.jpg",
    "/images/models/model-05.jpg",
]


def demo_wardrobe(rng: Optional[random.Random] = None) -> List[WardrobeItem]:
    rng = rng or random.Random()
    return [
        WardrobeItem(
            category=category,
            subcategory=subcategory,
            color=color,
            material=material,
            formality=rng.randint(1, 9),
            image=image,
            description=f"A stylish {color} {subcategory} made of {material}",
        )
        for category, subcategory, color, material, image in DEMO_WARDROBE
    ]


def demo_profile() -> Profile:
    return Profile(
        gallery=list(DEMO_GALLERY),
        attributes=ProfileAttributes(
            gender="Woman", hair="Brunette", skin_tone="Light", body_type="Slim", summary="Demo Profile"
        ),
    )
