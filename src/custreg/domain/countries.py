"""ISO 3166-1 country code table.

Static, closed enumeration: alpha-2 <-> alpha-3 <-> numeric <-> name.
Nothing mutates it at runtime; lookups are plain dict reads.
"""

from __future__ import annotations

from typing import NamedTuple


class Country(NamedTuple):
    """One ISO 3166-1 entry."""

    alpha2: str
    alpha3: str
    numeric: int
    name: str


COUNTRIES: tuple[Country, ...] = (
    Country("AD", "AND", 20, "Andorra"),
    Country("AE", "ARE", 784, "United Arab Emirates"),
    Country("AF", "AFG", 4, "Afghanistan"),
    Country("AG", "ATG", 28, "Antigua and Barbuda"),
    Country("AI", "AIA", 660, "Anguilla"),
    Country("AL", "ALB", 8, "Albania"),
    Country("AM", "ARM", 51, "Armenia"),
    Country("AO", "AGO", 24, "Angola"),
    Country("AQ", "ATA", 10, "Antarctica"),
    Country("AR", "ARG", 32, "Argentina"),
    Country("AS", "ASM", 16, "American Samoa"),
    Country("AT", "AUT", 40, "Austria"),
    Country("AU", "AUS", 36, "Australia"),
    Country("AW", "ABW", 533, "Aruba"),
    Country("AX", "ALA", 248, "Åland Islands"),
    Country("AZ", "AZE", 31, "Azerbaijan"),
    Country("BA", "BIH", 70, "Bosnia and Herzegovina"),
    Country("BB", "BRB", 52, "Barbados"),
    Country("BD", "BGD", 50, "Bangladesh"),
    Country("BE", "BEL", 56, "Belgium"),
    Country("BF", "BFA", 854, "Burkina Faso"),
    Country("BG", "BGR", 100, "Bulgaria"),
    Country("BH", "BHR", 48, "Bahrain"),
    Country("BI", "BDI", 108, "Burundi"),
    Country("BJ", "BEN", 204, "Benin"),
    Country("BL", "BLM", 652, "Saint Barthélemy"),
    Country("BM", "BMU", 60, "Bermuda"),
    Country("BN", "BRN", 96, "Brunei Darussalam"),
    Country("BO", "BOL", 68, "Bolivia"),
    Country("BQ", "BES", 535, "Bonaire, Sint Eustatius and Saba"),
    Country("BR", "BRA", 76, "Brazil"),
    Country("BS", "BHS", 44, "Bahamas"),
    Country("BT", "BTN", 64, "Bhutan"),
    Country("BV", "BVT", 74, "Bouvet Island"),
    Country("BW", "BWA", 72, "Botswana"),
    Country("BY", "BLR", 112, "Belarus"),
    Country("BZ", "BLZ", 84, "Belize"),
    Country("CA", "CAN", 124, "Canada"),
    Country("CC", "CCK", 166, "Cocos (Keeling) Islands"),
    Country("CD", "COD", 180, "Congo, Democratic Republic of the"),
    Country("CF", "CAF", 140, "Central African Republic"),
    Country("CG", "COG", 178, "Congo"),
    Country("CH", "CHE", 756, "Switzerland"),
    Country("CI", "CIV", 384, "Côte d'Ivoire"),
    Country("CK", "COK", 184, "Cook Islands"),
    Country("CL", "CHL", 152, "Chile"),
    Country("CM", "CMR", 120, "Cameroon"),
    Country("CN", "CHN", 156, "China"),
    Country("CO", "COL", 170, "Colombia"),
    Country("CR", "CRI", 188, "Costa Rica"),
    Country("CU", "CUB", 192, "Cuba"),
    Country("CV", "CPV", 132, "Cabo Verde"),
    Country("CW", "CUW", 531, "Curaçao"),
    Country("CX", "CXR", 162, "Christmas Island"),
    Country("CY", "CYP", 196, "Cyprus"),
    Country("CZ", "CZE", 203, "Czechia"),
    Country("DE", "DEU", 276, "Germany"),
    Country("DJ", "DJI", 262, "Djibouti"),
    Country("DK", "DNK", 208, "Denmark"),
    Country("DM", "DMA", 212, "Dominica"),
    Country("DO", "DOM", 214, "Dominican Republic"),
    Country("DZ", "DZA", 12, "Algeria"),
    Country("EC", "ECU", 218, "Ecuador"),
    Country("EE", "EST", 233, "Estonia"),
    Country("EG", "EGY", 818, "Egypt"),
    Country("EH", "ESH", 732, "Western Sahara"),
    Country("ER", "ERI", 232, "Eritrea"),
    Country("ES", "ESP", 724, "Spain"),
    Country("ET", "ETH", 231, "Ethiopia"),
    Country("FI", "FIN", 246, "Finland"),
    Country("FJ", "FJI", 242, "Fiji"),
    Country("FK", "FLK", 238, "Falkland Islands (Malvinas)"),
    Country("FM", "FSM", 583, "Micronesia, Federated States of"),
    Country("FO", "FRO", 234, "Faroe Islands"),
    Country("FR", "FRA", 250, "France"),
    Country("GA", "GAB", 266, "Gabon"),
    Country("GB", "GBR", 826, "United Kingdom of Great Britain and Northern Ireland"),
    Country("GD", "GRD", 308, "Grenada"),
    Country("GE", "GEO", 268, "Georgia"),
    Country("GF", "GUF", 254, "French Guiana"),
    Country("GG", "GGY", 831, "Guernsey"),
    Country("GH", "GHA", 288, "Ghana"),
    Country("GI", "GIB", 292, "Gibraltar"),
    Country("GL", "GRL", 304, "Greenland"),
    Country("GM", "GMB", 270, "Gambia"),
    Country("GN", "GIN", 324, "Guinea"),
    Country("GP", "GLP", 312, "Guadeloupe"),
    Country("GQ", "GNQ", 226, "Equatorial Guinea"),
    Country("GR", "GRC", 300, "Greece"),
    Country("GS", "SGS", 239, "South Georgia and the South Sandwich Islands"),
    Country("GT", "GTM", 320, "Guatemala"),
    Country("GU", "GUM", 316, "Guam"),
    Country("GW", "GNB", 624, "Guinea-Bissau"),
    Country("GY", "GUY", 328, "Guyana"),
    Country("HK", "HKG", 344, "Hong Kong"),
    Country("HM", "HMD", 334, "Heard Island and McDonald Islands"),
    Country("HN", "HND", 340, "Honduras"),
    Country("HR", "HRV", 191, "Croatia"),
    Country("HT", "HTI", 332, "Haiti"),
    Country("HU", "HUN", 348, "Hungary"),
    Country("ID", "IDN", 360, "Indonesia"),
    Country("IE", "IRL", 372, "Ireland"),
    Country("IL", "ISR", 376, "Israel"),
    Country("IM", "IMN", 833, "Isle of Man"),
    Country("IN", "IND", 356, "India"),
    Country("IO", "IOT", 86, "British Indian Ocean Territory"),
    Country("IQ", "IRQ", 368, "Iraq"),
    Country("IR", "IRN", 364, "Iran"),
    Country("IS", "ISL", 352, "Iceland"),
    Country("IT", "ITA", 380, "Italy"),
    Country("JE", "JEY", 832, "Jersey"),
    Country("JM", "JAM", 388, "Jamaica"),
    Country("JO", "JOR", 400, "Jordan"),
    Country("JP", "JPN", 392, "Japan"),
    Country("KE", "KEN", 404, "Kenya"),
    Country("KG", "KGZ", 417, "Kyrgyzstan"),
    Country("KH", "KHM", 116, "Cambodia"),
    Country("KI", "KIR", 296, "Kiribati"),
    Country("KM", "COM", 174, "Comoros"),
    Country("KN", "KNA", 659, "Saint Kitts and Nevis"),
    Country("KP", "PRK", 408, "Korea, Democratic People's Republic of"),
    Country("KR", "KOR", 410, "Korea, Republic of"),
    Country("KW", "KWT", 414, "Kuwait"),
    Country("KY", "CYM", 136, "Cayman Islands"),
    Country("KZ", "KAZ", 398, "Kazakhstan"),
    Country("LA", "LAO", 418, "Lao People's Democratic Republic"),
    Country("LB", "LBN", 422, "Lebanon"),
    Country("LC", "LCA", 662, "Saint Lucia"),
    Country("LI", "LIE", 438, "Liechtenstein"),
    Country("LK", "LKA", 144, "Sri Lanka"),
    Country("LR", "LBR", 430, "Liberia"),
    Country("LS", "LSO", 426, "Lesotho"),
    Country("LT", "LTU", 440, "Lithuania"),
    Country("LU", "LUX", 442, "Luxembourg"),
    Country("LV", "LVA", 428, "Latvia"),
    Country("LY", "LBY", 434, "Libya"),
    Country("MA", "MAR", 504, "Morocco"),
    Country("MC", "MCO", 492, "Monaco"),
    Country("MD", "MDA", 498, "Moldova, Republic of"),
    Country("ME", "MNE", 499, "Montenegro"),
    Country("MF", "MAF", 663, "Saint Martin (French part)"),
    Country("MG", "MDG", 450, "Madagascar"),
    Country("MH", "MHL", 584, "Marshall Islands"),
    Country("MK", "MKD", 807, "North Macedonia"),
    Country("ML", "MLI", 466, "Mali"),
    Country("MM", "MMR", 104, "Myanmar"),
    Country("MN", "MNG", 496, "Mongolia"),
    Country("MO", "MAC", 446, "Macao"),
    Country("MP", "MNP", 580, "Northern Mariana Islands"),
    Country("MQ", "MTQ", 474, "Martinique"),
    Country("MR", "MRT", 478, "Mauritania"),
    Country("MS", "MSR", 500, "Montserrat"),
    Country("MT", "MLT", 470, "Malta"),
    Country("MU", "MUS", 480, "Mauritius"),
    Country("MV", "MDV", 462, "Maldives"),
    Country("MW", "MWI", 454, "Malawi"),
    Country("MX", "MEX", 484, "Mexico"),
    Country("MY", "MYS", 458, "Malaysia"),
    Country("MZ", "MOZ", 508, "Mozambique"),
    Country("NA", "NAM", 516, "Namibia"),
    Country("NC", "NCL", 540, "New Caledonia"),
    Country("NE", "NER", 562, "Niger"),
    Country("NF", "NFK", 574, "Norfolk Island"),
    Country("NG", "NGA", 566, "Nigeria"),
    Country("NI", "NIC", 558, "Nicaragua"),
    Country("NL", "NLD", 528, "Netherlands"),
    Country("NO", "NOR", 578, "Norway"),
    Country("NP", "NPL", 524, "Nepal"),
    Country("NR", "NRU", 520, "Nauru"),
    Country("NU", "NIU", 570, "Niue"),
    Country("NZ", "NZL", 554, "New Zealand"),
    Country("OM", "OMN", 512, "Oman"),
    Country("PA", "PAN", 591, "Panama"),
    Country("PE", "PER", 604, "Peru"),
    Country("PF", "PYF", 258, "French Polynesia"),
    Country("PG", "PNG", 598, "Papua New Guinea"),
    Country("PH", "PHL", 608, "Philippines"),
    Country("PK", "PAK", 586, "Pakistan"),
    Country("PL", "POL", 616, "Poland"),
    Country("PM", "SPM", 666, "Saint Pierre and Miquelon"),
    Country("PN", "PCN", 612, "Pitcairn"),
    Country("PR", "PRI", 630, "Puerto Rico"),
    Country("PS", "PSE", 275, "Palestine, State of"),
    Country("PT", "PRT", 620, "Portugal"),
    Country("PW", "PLW", 585, "Palau"),
    Country("PY", "PRY", 600, "Paraguay"),
    Country("QA", "QAT", 634, "Qatar"),
    Country("RE", "REU", 638, "Réunion"),
    Country("RO", "ROU", 642, "Romania"),
    Country("RS", "SRB", 688, "Serbia"),
    Country("RU", "RUS", 643, "Russian Federation"),
    Country("RW", "RWA", 646, "Rwanda"),
    Country("SA", "SAU", 682, "Saudi Arabia"),
    Country("SB", "SLB", 90, "Solomon Islands"),
    Country("SC", "SYC", 690, "Seychelles"),
    Country("SD", "SDN", 729, "Sudan"),
    Country("SE", "SWE", 752, "Sweden"),
    Country("SG", "SGP", 702, "Singapore"),
    Country("SH", "SHN", 654, "Saint Helena, Ascension and Tristan da Cunha"),
    Country("SI", "SVN", 705, "Slovenia"),
    Country("SJ", "SJM", 744, "Svalbard and Jan Mayen"),
    Country("SK", "SVK", 703, "Slovakia"),
    Country("SL", "SLE", 694, "Sierra Leone"),
    Country("SM", "SMR", 674, "San Marino"),
    Country("SN", "SEN", 686, "Senegal"),
    Country("SO", "SOM", 706, "Somalia"),
    Country("SR", "SUR", 740, "Suriname"),
    Country("SS", "SSD", 728, "South Sudan"),
    Country("ST", "STP", 678, "Sao Tome and Principe"),
    Country("SV", "SLV", 222, "El Salvador"),
    Country("SX", "SXM", 534, "Sint Maarten (Dutch part)"),
    Country("SY", "SYR", 760, "Syrian Arab Republic"),
    Country("SZ", "SWZ", 748, "Eswatini"),
    Country("TC", "TCA", 796, "Turks and Caicos Islands"),
    Country("TD", "TCD", 148, "Chad"),
    Country("TF", "ATF", 260, "French Southern Territories"),
    Country("TG", "TGO", 768, "Togo"),
    Country("TH", "THA", 764, "Thailand"),
    Country("TJ", "TJK", 762, "Tajikistan"),
    Country("TK", "TKL", 772, "Tokelau"),
    Country("TL", "TLS", 626, "Timor-Leste"),
    Country("TM", "TKM", 795, "Turkmenistan"),
    Country("TN", "TUN", 788, "Tunisia"),
    Country("TO", "TON", 776, "Tonga"),
    Country("TR", "TUR", 792, "Türkiye"),
    Country("TT", "TTO", 780, "Trinidad and Tobago"),
    Country("TV", "TUV", 798, "Tuvalu"),
    Country("TW", "TWN", 158, "Taiwan"),
    Country("TZ", "TZA", 834, "Tanzania, United Republic of"),
    Country("UA", "UKR", 804, "Ukraine"),
    Country("UG", "UGA", 800, "Uganda"),
    Country("UM", "UMI", 581, "United States Minor Outlying Islands"),
    Country("US", "USA", 840, "United States of America"),
    Country("UY", "URY", 858, "Uruguay"),
    Country("UZ", "UZB", 860, "Uzbekistan"),
    Country("VA", "VAT", 336, "Holy See"),
    Country("VC", "VCT", 670, "Saint Vincent and the Grenadines"),
    Country("VE", "VEN", 862, "Venezuela"),
    Country("VG", "VGB", 92, "Virgin Islands (British)"),
    Country("VI", "VIR", 850, "Virgin Islands (U.S.)"),
    Country("VN", "VNM", 704, "Viet Nam"),
    Country("VU", "VUT", 548, "Vanuatu"),
    Country("WF", "WLF", 876, "Wallis and Futuna"),
    Country("WS", "WSM", 882, "Samoa"),
    Country("YE", "YEM", 887, "Yemen"),
    Country("YT", "MYT", 175, "Mayotte"),
    Country("ZA", "ZAF", 710, "South Africa"),
    Country("ZM", "ZMB", 894, "Zambia"),
    Country("ZW", "ZWE", 716, "Zimbabwe"),
)

_BY_ALPHA2: dict[str, Country] = {c.alpha2: c for c in COUNTRIES}
_BY_ALPHA3: dict[str, Country] = {c.alpha3: c for c in COUNTRIES}
_BY_NUMERIC: dict[int, Country] = {c.numeric: c for c in COUNTRIES}
_BY_NAME: dict[str, Country] = {c.name.casefold(): c for c in COUNTRIES}


def is_alpha2(code: str) -> bool:
    """Exact, case-sensitive membership test for an alpha-2 code."""
    return code in _BY_ALPHA2


def is_alpha3(code: str) -> bool:
    return code in _BY_ALPHA3


def by_alpha2(code: str) -> Country | None:
    return _BY_ALPHA2.get(code.upper())


def by_alpha3(code: str) -> Country | None:
    return _BY_ALPHA3.get(code.upper())


def by_numeric(code: int) -> Country | None:
    return _BY_NUMERIC.get(code)


def by_name(name: str) -> Country | None:
    """Case-insensitive lookup by canonical name."""
    return _BY_NAME.get(name.strip().casefold())


def lookup(query: str) -> Country | None:
    """Resolve *query* as a numeric code, alpha-2, alpha-3, or name.

    Returns None when nothing matches.
    """
    text = query.strip()
    if not text:
        return None
    if text.isdigit():
        return by_numeric(int(text))
    if len(text) == 2:
        return by_alpha2(text)
    if len(text) == 3:
        found = by_alpha3(text)
        if found is not None:
            return found
    return by_name(text)
