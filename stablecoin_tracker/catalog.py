"""Built-in stablecoin catalog.

Each row is ``(symbol, alias_names)``. Alias names are matched as
case-insensitive substrings of provider listing names during discovery.
"""

from stablecoin_tracker.providers.dto import CatalogEntry

_CATALOG_ROWS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("USDT", ("Tether USD", "Tether")),
    ("USDC", ("USD Coin",)),
    ("USDe", ("Ethena USDe",)),
    ("DAI", ("Dai",)),
    ("FDUSD", ("First Digital USD",)),
    ("PYUSD", ("PayPal USD",)),
    ("TUSD", ("TrueUSD",)),
    ("USD0", ("Usual USD",)),
    ("USDY", ("Ondo US Dollar Yield",)),
    ("FRAX", ("Frax",)),
    ("USDD", ("USDD",)),
    ("RLUSD", ("Ripple USD",)),
    ("USDG", ("Global Dollar",)),
    ("EURC", ("EURC",)),
    ("EURS", ("STASIS EURO",)),
    ("USDf", ("Falcon USD",)),
    ("USDB", ("USDB",)),
    ("USDP", ("Pax Dollar",)),
    ("USTC", ("TerraClassicUSD",)),
    ("USDX", ("USDX [Kava]",)),
    ("lisUSD", ("lisUSD",)),
    ("vBUSD", ("Venus BUSD",)),
    ("BUSD", ("BUSD", "Binance USD")),
    ("AEUR", ("Anchored Coins AEUR",)),
    ("USDL", ("Lift Dollar",)),
    ("GUSD", ("Gemini Dollar",)),
    ("LUSD", ("Liquity USD",)),
    ("EURCV", ("EUR CoinVertible",)),
    ("EURt", ("Tether EURt",)),
    ("EURI", ("Eurite",)),
    ("CUSD", ("Celo Dollar",)),
    ("XUSD", ("StraitsX USD",)),
    ("SUSD", ("sUSD",)),
    ("RSV", ("Reserve Dollar",)),
    ("XSGD", ("XSGD",)),
    ("MNEE", ("MNEE",)),
    ("ZUSD", ("ZUSD",)),
    ("IDRT", ("Rupiah Token",)),
    ("GYEN", ("GYEN",)),
    ("BIDR", ("BIDR",)),
    ("USDJ", ("USDJ",)),
    ("VCHF", ("VNX Swiss Franc",)),
    ("USDV", ("Verified USD",)),
    ("YUSD", ("Aegis YUSD",)),
    ("SBD", ("Steem Dollars",)),
    ("OUSD", ("Origin Dollar",)),
    ("vDAI", ("Venus DAI",)),
    ("WUSD", ("Worldwide USD",)),
    ("USDR", ("StablR USD",)),
    ("CEUR", ("Celo Euro",)),
    ("VEUR", ("VNX Euro",)),
    ("USDN", ("SMARDEX USDN", "Neutral AI")),
    ("DJED", ("Djed",)),
    ("EURR", ("StablR Euro",)),
    ("VAI", ("Vai",)),
    ("FEI", ("Fei USD",)),
    ("EURQ", ("Quantoz EURQ",)),
    ("USDs", ("Sperax USD",)),
    ("MKUSD", ("Prisma mkUSD",)),
    ("USDS", ("TheStandard USD",)),
    ("ESD", ("Empty Set Dollar",)),
    ("IDRX", ("IDRX",)),
    ("BAC", ("Basis Cash",)),
    ("AUSD", ("AUSD",)),
    ("GHO", ("GHO",)),
    ("xUSD", ("xUSD",)),
    ("USD+", ("Overnight.fi USD+",)),
    ("BUCK", ("Bucket Protocol BUCK Stablecoin",)),
    ("AMAPT", ("Amnis Aptos Coin",)),
    ("DOLA", ("DOLA",)),
    ("USDQ", ("Quantoz USDQ",)),
    ("FRXUSD", ("Frax USD",)),
    ("xDAI", ("xDAI",)),
    ("GYD", ("Gyroscope GYD",)),
    ("FXD", ("Fathom Dollar",)),
    ("MIM", ("Magic Internet Money",)),
    ("USDZ", ("Zedxion",)),
    ("XIDR", ("XIDR",)),
    ("SDAI", ("Savings Dai",)),
    ("JPYC", ("JPYC Prepaid", "JPY Coin v1")),
    ("EDLC", ("Edelcoin",)),
    ("BBUSD", ("BounceBit USD",)),
    ("EURA", ("Angle Protocol",)),
    ("USDH", ("USDH",)),
    ("DUSD", ("Decentralized USD",)),
    ("BRZ", ("Brazilian Digital Token",)),
    ("MIMATIC", ("MAI",)),
    ("USD1", ("USD One",)),
    ("SBC", ("Stable Coin",)),
    ("IST", ("Inter Stable Token",)),
    ("ZARP", ("ZARP Stablecoin",)),
    ("MTR", ("Meter Stable",)),
    ("MXNt", ("Tether MXNt",)),
    ("UXD", ("Criptodólar",)),
    ("TOR", ("TOR",)),
    ("lvlUSD", ("Level",)),
)

DEFAULT_CATALOG: tuple[CatalogEntry, ...] = tuple(
    CatalogEntry(symbol=symbol, alias_names=names) for symbol, names in _CATALOG_ROWS
)
