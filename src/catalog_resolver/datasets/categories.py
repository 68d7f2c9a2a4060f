from __future__ import annotations

from catalog_resolver.taxonomy import CategoryNode, Taxonomy


def _node(node_id: str, label: str, *children: CategoryNode) -> CategoryNode:
    return CategoryNode(id=node_id, label=label, children=tuple(children))


# Marketplace category tree (fashion only). Ids are stable storage keys; labels are
# what the upstream producer is asked to pick from.
CATEGORY_TREE = (
    _node(
        "women",
        "Femmes",
        _node(
            "women_clothing",
            "Vêtements",
            _node(
                "women_clothing_coats",
                "Manteaux et vestes",
                _node("women_clothing_coats_capes", "Capes et ponchos"),
                _node("women_clothing_coats_parkas", "Parkas"),
                _node("women_clothing_coats_trench", "Trenchs"),
                _node("women_clothing_coats_puffer", "Doudounes"),
                _node("women_clothing_coats_denim", "Vestes en jean"),
            ),
            _node(
                "women_clothing_sweaters",
                "Sweats et sweats à capuche",
                _node("women_clothing_sweaters_hoodies", "Sweats & sweats à capuche"),
                _node("women_clothing_sweaters_turtleneck", "Pulls col roulé"),
                _node("women_clothing_sweaters_cardigans", "Cardigans"),
            ),
            _node(
                "women_clothing_dresses",
                "Robes",
                _node("women_clothing_dresses_mini", "Mini"),
                _node("women_clothing_dresses_midi", "Midi"),
                _node("women_clothing_dresses_long", "Robes longues"),
                _node("women_clothing_dresses_summer", "Robes d'été"),
                _node("women_clothing_dresses_evening", "Robes de soirée"),
            ),
            _node(
                "women_clothing_skirts",
                "Jupes",
                _node("women_clothing_skirts_mini", "Minijupes"),
                _node("women_clothing_skirts_midi", "Jupes midi"),
                _node("women_clothing_skirts_long", "Jupes longues"),
            ),
            _node(
                "women_clothing_tops",
                "Hauts et t-shirts",
                _node("women_clothing_tops_shirts", "Chemises"),
                _node("women_clothing_tops_blouses", "Blouses"),
                _node("women_clothing_tops_tshirts", "T-shirts"),
                _node("women_clothing_tops_tanks", "Débardeurs"),
            ),
            _node(
                "women_clothing_jeans",
                "Jeans",
                _node("women_clothing_jeans_skinny", "Jeans skinny"),
                _node("women_clothing_jeans_straight", "Jeans coupe droite"),
                _node("women_clothing_jeans_flare", "Jeans évasés"),
            ),
        ),
        _node(
            "women_shoes",
            "Chaussures",
            _node("women_shoes_sneakers", "Baskets"),
            _node("women_shoes_boots", "Bottes"),
            _node("women_shoes_ankle_boots", "Bottines"),
            _node("women_shoes_heels", "Escarpins"),
            _node("women_shoes_sandals", "Sandales"),
        ),
        _node(
            "women_bags",
            "Sacs",
            _node("women_bags_handbags", "Sacs à main"),
            _node("women_bags_backpacks", "Sacs à dos"),
            _node("women_bags_clutches", "Pochettes"),
            _node("women_bags_totes", "Cabas"),
        ),
        _node(
            "women_accessories",
            "Accessoires",
            _node("women_accessories_belts", "Ceintures"),
            _node("women_accessories_scarves", "Écharpes et foulards"),
            _node("women_accessories_hats", "Chapeaux et casquettes"),
            _node("women_accessories_sunglasses", "Lunettes de soleil"),
            _node("women_accessories_jewelry", "Bijoux"),
        ),
    ),
    _node(
        "men",
        "Hommes",
        _node(
            "men_clothing",
            "Vêtements",
            _node(
                "men_clothing_jeans",
                "Jeans",
                _node("men_clothing_jeans_ripped", "Jeans troués"),
                _node("men_clothing_jeans_skinny", "Jeans skinny"),
                _node("men_clothing_jeans_slim", "Jeans slim"),
                _node("men_clothing_jeans_straight", "Jeans coupe droite"),
            ),
            _node(
                "men_clothing_coats",
                "Manteaux et vestes",
                _node("men_clothing_coats_parkas", "Parkas"),
                _node("men_clothing_coats_peacoats", "Cabans"),
                _node("men_clothing_coats_bomber", "Blousons aviateur"),
                _node("men_clothing_coats_puffer", "Doudounes"),
                _node("men_clothing_coats_denim", "Vestes en jean"),
            ),
            _node(
                "men_clothing_tops",
                "Hauts et t-shirts",
                _node("men_clothing_tops_shirts", "Chemises"),
                _node("men_clothing_tops_tshirts", "T-shirts"),
                _node("men_clothing_tops_polos", "Polos"),
            ),
            _node(
                "men_clothing_sweaters",
                "Sweats et pulls",
                _node("men_clothing_sweaters_hoodies", "Sweats à capuche"),
                _node("men_clothing_sweaters_jumpers", "Pulls"),
                _node("men_clothing_sweaters_cardigans", "Cardigans"),
            ),
            _node(
                "men_clothing_pants",
                "Pantalons",
                _node("men_clothing_pants_chinos", "Chinos"),
                _node("men_clothing_pants_joggers", "Joggings"),
                _node("men_clothing_pants_suit", "Pantalons de costume"),
            ),
            _node("men_clothing_shorts", "Shorts"),
        ),
        _node(
            "men_shoes",
            "Chaussures",
            _node("men_shoes_sneakers", "Baskets"),
            _node("men_shoes_boots", "Bottes"),
            _node("men_shoes_loafers", "Mocassins"),
            _node("men_shoes_derbies", "Derbies"),
        ),
        _node(
            "men_accessories",
            "Accessoires",
            _node("men_accessories_belts", "Ceintures"),
            _node("men_accessories_ties", "Cravates"),
            _node("men_accessories_watches", "Montres"),
            _node("men_accessories_caps", "Casquettes"),
        ),
    ),
    _node(
        "kids",
        "Enfants",
        _node(
            "kids_girls",
            "Filles",
            _node("kids_girls_dresses", "Robes"),
            _node("kids_girls_tops", "Hauts et t-shirts"),
            _node("kids_girls_coats", "Manteaux et vestes"),
            _node("kids_girls_shoes", "Chaussures"),
        ),
        _node(
            "kids_boys",
            "Garçons",
            _node("kids_boys_tops", "Hauts et t-shirts"),
            _node("kids_boys_pants", "Pantalons et shorts"),
            _node("kids_boys_coats", "Manteaux et vestes"),
            _node("kids_boys_shoes", "Chaussures"),
        ),
        _node(
            "kids_baby",
            "Bébés",
            _node("kids_baby_bodysuits", "Bodies"),
            _node("kids_baby_pajamas", "Pyjamas"),
        ),
    ),
)

DEFAULT_TAXONOMY = Taxonomy(roots=CATEGORY_TREE)

# Genre labels the producer may emit, mapped to top-level taxonomy ids.
GENRE_TO_TOP_LEVEL = {
    "femmes": "women",
    "femme": "women",
    "women": "women",
    "woman": "women",
    "hommes": "men",
    "homme": "men",
    "men": "men",
    "man": "men",
    "enfants": "kids",
    "enfant": "kids",
    "kids": "kids",
    "children": "kids",
}
