"""
Country reference table used for metadata enrichment.

Lowercase code -> country name. Iteration order is the matching order for
name-based detection, so keep new entries at the end.
"""
from types import MappingProxyType


COUNTRY_NAMES = MappingProxyType({
    "us": "United States", "uk": "United Kingdom", "ca": "Canada", "au": "Australia",
    "de": "Germany", "fr": "France", "es": "Spain", "it": "Italy", "nl": "Netherlands",
    "be": "Belgium", "ch": "Switzerland", "at": "Austria", "se": "Sweden", "no": "Norway",
    "dk": "Denmark", "fi": "Finland", "pl": "Poland", "cz": "Czech Republic", "sk": "Slovakia",
    "hu": "Hungary", "ro": "Romania", "bg": "Bulgaria", "hr": "Croatia", "si": "Slovenia",
    "rs": "Serbia", "ba": "Bosnia and Herzegovina", "me": "Montenegro", "mk": "North Macedonia",
    "al": "Albania", "gr": "Greece", "tr": "Turkey", "ru": "Russia", "ua": "Ukraine",
    "by": "Belarus", "lt": "Lithuania", "lv": "Latvia", "ee": "Estonia", "is": "Iceland",
    "ie": "Ireland", "pt": "Portugal", "mx": "Mexico", "br": "Brazil", "ar": "Argentina",
    "cl": "Chile", "co": "Colombia", "pe": "Peru", "ve": "Venezuela", "ec": "Ecuador",
    "uy": "Uruguay", "py": "Paraguay", "bo": "Bolivia", "jp": "Japan", "kr": "South Korea",
    "cn": "China", "tw": "Taiwan", "hk": "Hong Kong", "sg": "Singapore", "th": "Thailand",
    "my": "Malaysia", "id": "Indonesia", "ph": "Philippines", "vn": "Vietnam", "in": "India",
    "pk": "Pakistan", "bd": "Bangladesh", "lk": "Sri Lanka", "af": "Afghanistan", "ir": "Iran",
    "iq": "Iraq", "il": "Israel", "ps": "Palestine", "jo": "Jordan", "lb": "Lebanon",
    "sy": "Syria", "sa": "Saudi Arabia", "ae": "United Arab Emirates", "kw": "Kuwait",
    "qa": "Qatar", "bh": "Bahrain", "om": "Oman", "ye": "Yemen", "eg": "Egypt",
    "ly": "Libya", "tn": "Tunisia", "dz": "Algeria", "ma": "Morocco", "sd": "Sudan",
    "et": "Ethiopia", "ke": "Kenya", "tz": "Tanzania", "ug": "Uganda", "rw": "Rwanda",
    "za": "South Africa", "ng": "Nigeria", "gh": "Ghana", "ci": "Côte d'Ivoire",
    "sn": "Senegal", "ml": "Mali", "bf": "Burkina Faso", "ne": "Niger", "td": "Chad",
    "cm": "Cameroon", "ga": "Gabon", "cg": "Republic of the Congo",
    "cd": "Democratic Republic of the Congo",
    "ao": "Angola", "zm": "Zambia", "zw": "Zimbabwe", "bw": "Botswana", "na": "Namibia",
    "sz": "Eswatini", "ls": "Lesotho", "mg": "Madagascar", "mu": "Mauritius", "sc": "Seychelles",
})

__all__ = ["COUNTRY_NAMES"]
