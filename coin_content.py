# ─────────────────────────────────────────────────────────────────────────────
#  Coin identifier content and limits
#
#  COIN_PROMPT        — fixed prompt sent to the AI alongside every image
#  DEFAULT_IMAGE_PATH — bundled sample shown on first visit (no AI call)
#  DEFAULT_ANALYSIS   — analysis text shown next to the bundled sample
#  MAX_UPLOAD_BYTES   — largest accepted upload
#  ACCEPTED_TYPES     — value of the file picker's accept attribute
#  MAX_SESSIONS       — sessions kept in memory before the oldest is dropped
#  MAX_SESSION_IMAGE_BYTES — total size of the images those sessions may hold
# ─────────────────────────────────────────────────────────────────────────────
import os

_BASE_DIR = os.path.dirname(os.path.abspath(__file__))

DEFAULT_IMAGE_PATH = os.path.join(_BASE_DIR, "static", "default-coin.png")

MAX_UPLOAD_BYTES = 20 * 1024 * 1024  # 20 MiB

ACCEPTED_TYPES = "image/jpeg,image/png,image/jpg"

MAX_SESSIONS            = 256
MAX_SESSION_IMAGE_BYTES = 512 * 1024 * 1024  # data URI characters

COIN_PROMPT = (
    "Analyze this coin image for educational purposes and provide the following information:\n"
    "1. Coin identification (country, currency, denomination, year, series)\n"
    "2. Physical characteristics (diameter, thickness, weight, composition, edge, shape)\n"
    "3. Design elements (obverse, reverse, mint mark, designer, inscriptions)\n"
    "4. Historical context (significance, mintage, historical period, what it commemorates)\n"
    "5. Additional information (collectible value, rarity, notable features, grading)\n"
    "\n"
    "IMPORTANT: This is for educational purposes only."
)

DEFAULT_ANALYSIS = """1. Coin Identification:
- Country: United States
- Currency: US Dollar
- Denomination: Quarter Dollar (25 cents)
- Year: 2000
- Series: 50 State Quarters Program

2. Physical Characteristics:
- Diameter: 24.26 mm
- Thickness: 1.75 mm
- Weight: 5.67 grams
- Composition: 91.67% copper, 8.33% nickel (clad)
- Edge: Reeded (ridged)
- Shape: Round

3. Design Elements:
- Obverse: George Washington profile (left-facing)
- Reverse: Massachusetts state design - The Minuteman statue
- Mint Mark: D (Denver)
- Designer: John Flanagan (obverse), William Cousins (reverse)
- Inscriptions: "UNITED STATES OF AMERICA", "QUARTER DOLLAR", "LIBERTY", "IN GOD WE TRUST"

4. Historical Context:
- Significance: Part of the 50 State Quarters Program (1999-2008)
- Mintage: 1,147,600,000 (Denver mint)
- Historical Period: Early 21st century American coinage
- Commemorates: Massachusetts, the 6th state to join the Union
- Release Date: January 3, 2000

5. Additional Information:
- Collectible Value: Common circulation coin, $0.25-$1 in uncirculated condition
- Rarity: Common
- Notable Features: The Minuteman statue represents the state's role in the American Revolution
- Grading: Approximately AU (About Uncirculated)
- Similar Coins: Other State Quarters in the series"""

# ── User-facing messages ─────────────────────────────────────────────────────
MSG_UNSUPPORTED_TYPE = "Please upload a valid image file"
MSG_TOO_LARGE        = "Image size should be less than 20MB"
MSG_READ_FAILED      = "Failed to read the image file. Please try again."
MSG_LOAD_FAILED      = "Failed to load default image"
MSG_ANALYZE_FAILED   = "Failed to analyze image. Please try again."
