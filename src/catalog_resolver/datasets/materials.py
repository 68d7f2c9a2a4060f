from __future__ import annotations

from catalog_resolver.models import CandidateRecord

_MATERIAL_TABLE = [
    # Natural fibres
    ("coton", "Coton", ["cotton", "jersey", "molleton"]),
    ("laine", "Laine", ["wool", "mérinos"]),
    ("soie", "Soie", ["silk", "satin de soie"]),
    ("lin", "Lin", ["linen", "toile de lin"]),
    ("cachemire", "Cachemire", ["cashmere"]),
    ("mohair", "Mohair", []),
    ("alpaga", "Alpaga", ["alpaca"]),
    ("chanvre", "Chanvre", ["hemp"]),
    ("bambou", "Bambou", ["bamboo"]),
    # Synthetic fibres
    ("polyester", "Polyester", ["synthétique", "microfibre"]),
    ("viscose", "Viscose", ["rayonne", "rayon", "modal"]),
    ("elasthanne", "Élasthanne", ["spandex", "lycra", "stretch"]),
    ("nylon", "Nylon", ["polyamide"]),
    ("acrylique", "Acrylique", ["acrylic"]),
    # Leathers
    ("cuir", "Cuir", ["leather", "nappa"]),
    ("cuir-synthetique", "Cuir synthétique", ["simili cuir", "faux cuir", "skaï", "vegan leather"]),
    ("daim", "Daim", ["suede", "suède", "nubuck"]),
    # Special textiles
    ("denim", "Jean/Denim", ["jean", "jeans", "toile"]),
    ("velours", "Velours", ["velvet", "velours côtelé", "corduroy"]),
    ("dentelle", "Dentelle", ["lace", "guipure", "broderie anglaise"]),
    ("satin", "Satin", ["satiné", "charmeuse"]),
    ("tweed", "Tweed", ["bouclé", "bouclette"]),
    ("maille", "Maille", ["tricot", "knit", "crochet"]),
    ("mousseline", "Mousseline", ["chiffon", "voile"]),
    # Furs
    ("fourrure", "Fourrure", ["fur", "vison", "renard"]),
    ("fourrure-synthetique", "Fourrure synthétique", ["fausse fourrure", "faux fur"]),
    # Hard materials and trims
    ("bois", "Bois", ["wood", "rotin", "osier"]),
    ("metal", "Métal", ["metal", "acier", "laiton", "aluminium", "fer"]),
    ("plastique", "Plastique", ["pvc", "vinyle", "résine"]),
    ("paillettes", "Paillettes", ["sequins", "strass", "glitter"]),
    ("raphia", "Raphia", ["paille", "straw", "jonc"]),
]

MATERIAL_RECORDS = [
    CandidateRecord(id=material_id, name=name, aliases=(material_id, *aliases))
    for material_id, name, aliases in _MATERIAL_TABLE
]
