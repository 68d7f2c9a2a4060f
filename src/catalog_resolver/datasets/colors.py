from __future__ import annotations

from catalog_resolver.models import CandidateRecord

# (id, display name, hex, aliases)
_COLOR_TABLE = [
    ("noir", "Noir", "#000000", ["black", "sombre", "ébène"]),
    ("blanc", "Blanc", "#FFFFFF", ["white", "ivoire", "écru", "cassé"]),
    ("gris", "Gris", "#808080", ["grey", "gray", "anthracite", "charbon"]),
    ("gris-clair", "Gris clair", "#D3D3D3", ["light grey", "perle", "souris"]),
    ("bleu", "Bleu", "#0066FF", ["blue", "azur", "cobalt", "roi"]),
    ("bleu-marine", "Bleu marine", "#000080", ["navy", "marine", "nuit"]),
    ("bleu-clair", "Bleu clair", "#87CEEB", ["ciel", "pastel", "baby blue", "light blue"]),
    ("turquoise", "Turquoise", "#40E0D0", ["cyan", "aqua", "lagon"]),
    ("rouge", "Rouge", "#FF0000", ["red", "carmin", "vermillon", "cerise"]),
    ("bordeaux", "Bordeaux", "#800020", ["burgundy", "lie de vin", "grenat", "pourpre"]),
    ("rose", "Rose", "#FFC0CB", ["pink", "fuchsia", "magenta", "saumon"]),
    ("rose-pale", "Rose pâle", "#FFE4E1", ["blush", "poudre", "dragée"]),
    ("vert", "Vert", "#008000", ["green", "émeraude", "jade"]),
    ("vert-fonce", "Vert foncé", "#006400", ["kaki", "olive", "sapin", "bouteille", "forêt"]),
    ("vert-clair", "Vert clair", "#90EE90", ["menthe", "pistache", "anis", "lime"]),
    ("jaune", "Jaune", "#FFCC00", ["yellow", "citron", "moutarde"]),
    ("orange", "Orange", "#FFA500", ["tangerine", "abricot", "pêche"]),
    ("corail", "Corail", "#FF7F50", ["coral", "pamplemousse"]),
    ("violet", "Violet", "#800080", ["purple", "mauve", "lilas", "prune", "aubergine"]),
    ("lavande", "Lavande", "#E6E6FA", ["parme", "lilas clair", "glycine"]),
    ("marron", "Marron", "#8B4513", ["brown", "chocolat", "café", "noisette", "taupe"]),
    ("beige", "Beige", "#F5F5DC", ["sable", "nude", "chameau"]),
    ("camel", "Camel", "#C19A6B", ["fauve", "cognac", "havane", "tan"]),
    ("creme", "Crème", "#FFFDD0", ["cream", "vanille", "nacre"]),
    ("argent", "Argent", "#C0C0C0", ["silver", "métallisé"]),
    ("or", "Or", "#FFD700", ["gold", "doré"]),
    ("cuivre", "Cuivre", "#B87333", ["copper", "bronze", "rouille"]),
    ("multicolore", "Multicolore", "#FF6B6B", ["imprimé", "motif", "rayé", "fleuri", "coloré"]),
]

COLOR_HEX = {color_id: hex_code for color_id, _name, hex_code, _aliases in _COLOR_TABLE}

# Ids are matchable as well, since producers sometimes echo the storage key.
COLOR_RECORDS = [
    CandidateRecord(id=color_id, name=name, aliases=(color_id, *aliases))
    for color_id, name, _hex, aliases in _COLOR_TABLE
]
