"""Static application constants."""

PROJECT_NAME = "CareerConnect"
API_V1_STR = "/api/v1"

# Upload limits shared by image, OCR and generic uploads
MAX_UPLOAD_SIZE = 5 * 1024 * 1024
OCR_ALLOWED_CONTENT_TYPES = ("image/jpeg", "image/png", "image/webp")

DEFAULT_ITEMS_PER_GROUP = 100
MAX_ITEMS_PER_GROUP = 100

# Coupon codes are KPN- plus four digits
MAX_KUPON = 9999

MUDHOHI_SHEET_HEADERS = [
    "Nama Pengqurban",
    "Nama Peruntukan",
    "Alamat",
    "Jenis Hewan",
    "Jumlah Hewan",
    "Cara Bayar",
    "Status Pembayaran",
    "Kode Dash",
    "Tanggal",
    "Potong Sendiri",
    "Ambil Daging",
    "Sudah Ambil Daging",
    "Pesan Khusus",
    "Keterangan",
    "Barcode Image",
]
