"""Static currency table (ISO 4217 subset)"""

from functools import lru_cache
from typing import Dict, List, Tuple

from splitledger.core.exceptions import InvalidCurrency
from splitledger.models.currency import Currency

# code -> (name, symbol, decimal digits)
CURRENCY_TABLE: Dict[str, Tuple[str, str, int]] = {
    "AED": ("United Arab Emirates Dirham", "د.إ", 2),
    "AFN": ("Afghan Afghani", "؋", 2),
    "ALL": ("Albanian Lek", "L", 2),
    "AMD": ("Armenian Dram", "֏", 2),
    "ANG": ("Netherlands Antillean Guilder", "ƒ", 2),
    "AOA": ("Angolan Kwanza", "Kz", 2),
    "ARS": ("Argentine Peso", "$", 2),
    "AUD": ("Australian Dollar", "$", 2),
    "AWG": ("Aruban Florin", "ƒ", 2),
    "BAM": ("Bosnia and Herzegovina Convertible Mark", "KM", 2),
    "BBD": ("Barbados Dollar", "$", 2),
    "BDT": ("Bangladeshi Taka", "৳", 2),
    "BGN": ("Bulgarian Lev", "лв", 2),
    "BHD": ("Bahraini Dinar", ".د.ب", 3),
    "BIF": ("Burundian Franc", "FBu", 0),
    "BMD": ("Bermudian Dollar", "$", 2),
    "BND": ("Brunei Dollar", "$", 2),
    "BOB": ("Bolivian Boliviano", "Bs.", 2),
    "BRL": ("Brazilian Real", "R$", 2),
    "BSD": ("Bahamian Dollar", "$", 2),
    "BTN": ("Bhutanese Ngultrum", "Nu.", 2),
    "BWP": ("Botswana Pula", "P", 2),
    "BYN": ("Belarusian Ruble", "Br", 2),
    "BZD": ("Belize Dollar", "BZ$", 2),
    "CAD": ("Canadian Dollar", "$", 2),
    "CDF": ("Congolese Franc", "FC", 2),
    "CHF": ("Swiss Franc", "CHF", 2),
    "CLP": ("Chilean Peso", "$", 0),
    "CNY": ("Chinese Yuan", "¥", 2),
    "COP": ("Colombian Peso", "$", 2),
    "CRC": ("Costa Rican Colón", "₡", 2),
    "CUP": ("Cuban Peso", "₱", 2),
    "CVE": ("Cape Verdean Escudo", "$", 2),
    "CZK": ("Czech Koruna", "Kč", 2),
    "DJF": ("Djiboutian Franc", "Fdj", 0),
    "DKK": ("Danish Krone", "kr", 2),
    "DOP": ("Dominican Peso", "RD$", 2),
    "DZD": ("Algerian Dinar", "د.ج", 2),
    "EGP": ("Egyptian Pound", "£", 2),
    "ETB": ("Ethiopian Birr", "Br", 2),
    "EUR": ("Euro", "€", 2),
    "FJD": ("Fiji Dollar", "FJ$", 2),
    "GBP": ("Pound Sterling", "£", 2),
    "GEL": ("Georgian Lari", "₾", 2),
    "GHS": ("Ghanaian Cedi", "GH₵", 2),
    "GMD": ("Gambian Dalasi", "D", 2),
    "GNF": ("Guinean Franc", "FG", 0),
    "GTQ": ("Guatemalan Quetzal", "Q", 2),
    "GYD": ("Guyanese Dollar", "$", 2),
    "HKD": ("Hong Kong Dollar", "HK$", 2),
    "HNL": ("Honduran Lempira", "L", 2),
    "HTG": ("Haitian Gourde", "G", 2),
    "HUF": ("Hungarian Forint", "Ft", 2),
    "IDR": ("Indonesian Rupiah", "Rp", 2),
    "ILS": ("Israeli New Shekel", "₪", 2),
    "INR": ("Indian Rupee", "₹", 2),
    "IQD": ("Iraqi Dinar", "د.ع", 3),
    "IRR": ("Iranian Rial", "﷼", 2),
    "ISK": ("Icelandic Króna", "kr", 0),
    "JMD": ("Jamaican Dollar", "J$", 2),
    "JOD": ("Jordanian Dinar", "JD", 3),
    "JPY": ("Japanese Yen", "¥", 0),
    "KES": ("Kenyan Shilling", "KSh", 2),
    "KHR": ("Cambodian Riel", "៛", 2),
    "KMF": ("Comoro Franc", "CF", 0),
    "KRW": ("South Korean Won", "₩", 0),
    "KWD": ("Kuwaiti Dinar", "KD", 3),
    "KYD": ("Cayman Islands Dollar", "$", 2),
    "KZT": ("Kazakhstani Tenge", "₸", 2),
    "LAK": ("Lao Kip", "₭", 2),
    "LBP": ("Lebanese Pound", "ل.ل.", 2),
    "LKR": ("Sri Lankan Rupee", "Rs", 2),
    "LRD": ("Liberian Dollar", "$", 2),
    "LSL": ("Lesotho Loti", "L", 2),
    "LYD": ("Libyan Dinar", "LD", 3),
    "MAD": ("Moroccan Dirham", "MAD", 2),
    "MDL": ("Moldovan Leu", "L", 2),
    "MGA": ("Malagasy Ariary", "Ar", 1),
    "MKD": ("Macedonian Denar", "ден", 2),
    "MMK": ("Myanma Kyat", "K", 2),
    "MOP": ("Macanese Pataca", "MOP$", 2),
    "MRU": ("Mauritanian Ouguiya", "UM", 1),
    "MUR": ("Mauritian Rupee", "₨", 2),
    "MVR": ("Maldivian Rufiyaa", "Rf", 2),
    "MWK": ("Malawian Kwacha", "MK", 2),
    "MXN": ("Mexican Peso", "$", 2),
    "MYR": ("Malaysian Ringgit", "RM", 2),
    "MZN": ("Mozambican Metical", "MT", 2),
    "NAD": ("Namibian Dollar", "$", 2),
    "NGN": ("Nigerian Naira", "₦", 2),
    "NIO": ("Nicaraguan Córdoba", "C$", 2),
    "NOK": ("Norwegian Krone", "kr", 2),
    "NPR": ("Nepalese Rupee", "₨", 2),
    "NZD": ("New Zealand Dollar", "$", 2),
    "OMR": ("Omani Rial", "﷼", 3),
    "PAB": ("Panamanian Balboa", "B/.", 2),
    "PEN": ("Peruvian Sol", "S/.", 2),
    "PGK": ("Papua New Guinean Kina", "K", 2),
    "PHP": ("Philippine Peso", "₱", 2),
    "PKR": ("Pakistani Rupee", "₨", 2),
    "PLN": ("Polish Złoty", "zł", 2),
    "PYG": ("Paraguayan Guarani", "₲", 0),
    "QAR": ("Qatari Riyal", "﷼", 2),
    "RON": ("Romanian Leu", "lei", 2),
    "RSD": ("Serbian Dinar", "дин.", 2),
    "RUB": ("Russian Ruble", "₽", 2),
    "RWF": ("Rwandan Franc", "R₣", 0),
    "SAR": ("Saudi Riyal", "﷼", 2),
    "SBD": ("Solomon Islands Dollar", "$", 2),
    "SCR": ("Seychellois Rupee", "₨", 2),
    "SDG": ("Sudanese Pound", "ج.س.", 2),
    "SEK": ("Swedish Krona", "kr", 2),
    "SGD": ("Singapore Dollar", "S$", 2),
    "SHP": ("Saint Helena Pound", "£", 2),
    "SOS": ("Somali Shilling", "S", 2),
    "SRD": ("Surinamese Dollar", "$", 2),
    "STN": ("São Tomé and Príncipe Dobra", "Db", 2),
    "SZL": ("Swazi Lilangeni", "L", 2),
    "THB": ("Thai Baht", "฿", 2),
    "TJS": ("Tajikistani Somoni", "SM", 2),
    "TMT": ("Turkmenistani Manat", "T", 2),
    "TND": ("Tunisian Dinar", "DT", 3),
    "TOP": ("Tongan Paʻanga", "T$", 2),
    "TRY": ("Turkish Lira", "₺", 2),
    "TTD": ("Trinidad and Tobago Dollar", "TT$", 2),
    "TWD": ("New Taiwan Dollar", "NT$", 2),
    "TZS": ("Tanzanian Shilling", "TSh", 2),
    "UAH": ("Ukrainian Hryvnia", "₴", 2),
    "UGX": ("Ugandan Shilling", "USh", 0),
    "USD": ("United States Dollar", "$", 2),
    "UYU": ("Uruguayan Peso", "$U", 2),
    "UZS": ("Uzbekistan Som", "лв", 2),
    "VES": ("Venezuelan Bolívar Soberano", "Bs.S", 2),
    "VND": ("Vietnamese Dong", "₫", 0),
    "XCD": ("East Caribbean Dollar", "$", 2),
    "XOF": ("CFA Franc BCEAO", "CFA", 0),
    "XPF": ("CFP Franc", "₣", 0),
    "YER": ("Yemeni Rial", "﷼", 2),
    "ZAR": ("South African Rand", "R", 2),
    "ZMW": ("Zambian Kwacha", "ZK", 2),
}


@lru_cache(maxsize=None)
def get_currency(code: str) -> Currency:
    """
    Look up a currency by its code.

    Args:
        code: Three-letter currency code (case-insensitive)

    Returns:
        Immutable Currency entry

    Raises:
        InvalidCurrency: If the code is not in the table
    """
    if not isinstance(code, str):
        raise InvalidCurrency(f"Currency code must be a string, got {code!r}")

    normalized = code.strip().upper()
    entry = CURRENCY_TABLE.get(normalized)
    if entry is None:
        raise InvalidCurrency(
            f"Unsupported currency: {code}", details={"currency": code}
        )

    name, symbol, decimal_digits = entry
    return Currency(
        code=normalized, name=name, symbol=symbol, decimal_digits=decimal_digits
    )


def is_supported_currency(code: str) -> bool:
    """Check whether a currency code is present in the table"""
    return isinstance(code, str) and code.strip().upper() in CURRENCY_TABLE


def list_currencies() -> List[Currency]:
    """Return every supported currency ordered by code"""
    return [get_currency(code) for code in sorted(CURRENCY_TABLE)]
