"""Initial schema and seed data for CareerConnect

Revision ID: 20250601_000000
Revises: None
Create Date: 2025-06-01 00:00:00.000000

This is the initial migration that creates all tables and seeds default data:
- Accounts (users, profiles, tokens, addresses)
- Job board (companies, jobs, form field catalogue, applications, notes)
- Qurban administration (animal types, sponsors, animals, products, distribution, coupons)
- Bookkeeping (categories, transactions, budgets)
- Site settings and images
- Default application form fields, bookkeeping categories and animal types

Revision format: YYYYMMDD_HHMMSS_description

"""

from datetime import datetime
from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import ENUM

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20250601_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


ENUM_VALUES = {
    "userrole": ("RECRUITER", "APPLICANT"),
    "jobstatus": ("ACTIVE", "DRAFT", "INACTIVE"),
    "employmenttype": ("FULL_TIME", "PART_TIME", "CONTRACT", "FREELANCE", "INTERNSHIP"),
    "applicationstatus": ("PENDING", "UNDER_REVIEW", "REJECTED", "ACCEPTED"),
    "fieldstate": ("mandatory", "optional", "off"),
    "jenishewan": ("SAPI", "DOMBA"),
    "hewanstatus": ("TERDAFTAR", "SIAP_SEMBELIH", "DISEMBELIH", "DITIMBANG", "DIINVENTORY", "TERDISTRIBUSI"),
    "paymentstatus": ("BELUM_BAYAR", "MENUNGGU_KONFIRMASI", "LUNAS", "BATAL"),
    "carabayar": ("TUNAI", "TRANSFER"),
    "jenisproduk": ("DAGING", "KEPALA", "KAKI", "KULIT", "JEROAN", "LAINNYA"),
    "shipmentstatus": ("DIKIRIM", "DITERIMA"),
    "kuponstatus": ("DISIMPAN", "DIBAGIKAN", "DIKEMBALIKAN"),
    "animalgrouptype": ("HEWAN_BESAR", "HEWAN_KECIL", "ALL"),
    "transactiontype": ("PEMASUKAN", "PENGELUARAN"),
}


def _enum(name: str) -> sa.types.TypeEngine:
    """Enum column type; on Postgres the named type is created once up front."""
    values = ENUM_VALUES[name]
    return sa.Enum(*values, name=name).with_variant(ENUM(*values, name=name, create_type=False), "postgresql")


user_role = _enum("userrole")
job_status = _enum("jobstatus")
employment_type = _enum("employmenttype")
application_status = _enum("applicationstatus")
field_state = _enum("fieldstate")
jenis_hewan = _enum("jenishewan")
hewan_status = _enum("hewanstatus")
payment_status = _enum("paymentstatus")
cara_bayar = _enum("carabayar")
jenis_produk = _enum("jenisproduk")
shipment_status = _enum("shipmentstatus")
kupon_status = _enum("kuponstatus")
animal_group_type = _enum("animalgrouptype")
transaction_type = _enum("transactiontype")


def _timestamps(updated: bool = True) -> list:
    columns = [sa.Column("created_at", sa.DateTime(), nullable=False)]
    if updated:
        columns.append(sa.Column("updated_at", sa.DateTime(), nullable=False))
    return columns


def upgrade() -> None:
    """Create all tables and seed initial data."""
    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        for name, values in ENUM_VALUES.items():
            ENUM(*values, name=name).create(bind, checkfirst=True)

    # Accounts
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("password_hash", sa.String(), nullable=True),
        sa.Column("role", user_role, nullable=False),
        sa.Column("roles", sa.String(), nullable=False),
        sa.Column("email_verified", sa.DateTime(), nullable=True),
        sa.Column("image", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "profiles",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("full_name", sa.String(), nullable=True),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("location", sa.String(), nullable=True),
        sa.Column("linkedin", sa.String(), nullable=True),
        sa.Column("resume_url", sa.String(), nullable=True),
        sa.Column("bio", sa.String(), nullable=True),
        sa.Column("avatar_url", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
    )
    op.create_index("ix_profiles_user_id", "profiles", ["user_id"], unique=True)

    op.create_table(
        "other_user_info",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("data", sa.String(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
    )
    op.create_index("ix_other_user_info_user_id", "other_user_info", ["user_id"], unique=True)

    for table in ("verification_tokens", "password_reset_tokens"):
        op.create_table(
            table,
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("email", sa.String(), nullable=False),
            sa.Column("token", sa.String(), nullable=False),
            sa.Column("expires", sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index(f"ix_{table}_email", table, ["email"])
        op.create_index(f"ix_{table}_token", table, ["token"], unique=True)

    op.create_table(
        "addresses",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("label", sa.String(), nullable=True),
        sa.Column("recipient_name", sa.String(), nullable=True),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("street", sa.String(), nullable=False),
        sa.Column("city", sa.String(), nullable=False),
        sa.Column("province", sa.String(), nullable=True),
        sa.Column("postal_code", sa.String(), nullable=True),
        sa.Column("country", sa.String(), nullable=False),
        sa.Column("is_primary", sa.Boolean(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
    )
    op.create_index("ix_addresses_user_id", "addresses", ["user_id"])
    op.create_index("ix_addresses_is_active", "addresses", ["is_active"])

    # Job board
    op.create_table(
        "companies",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("logo", sa.String(), nullable=True),
        sa.Column("website", sa.String(), nullable=True),
        sa.Column("description", sa.String(), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_companies_name", "companies", ["name"])

    op.create_table(
        "jobs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("slug", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("department", sa.String(), nullable=True),
        sa.Column("location", sa.String(), nullable=True),
        sa.Column("remote_policy", sa.String(), nullable=False),
        sa.Column("salary_min", sa.Integer(), nullable=True),
        sa.Column("salary_max", sa.Integer(), nullable=True),
        sa.Column("salary_currency", sa.String(), nullable=False),
        sa.Column("employment_type", employment_type, nullable=False),
        sa.Column("status", job_status, nullable=False),
        sa.Column("requirements", sa.String(), nullable=True),
        sa.Column("experience_level", sa.String(), nullable=True),
        sa.Column("education_level", sa.String(), nullable=True),
        sa.Column("number_of_candidates", sa.Integer(), nullable=False),
        sa.Column("applications_count", sa.Integer(), nullable=False),
        sa.Column("author_id", sa.Integer(), nullable=False),
        sa.Column("company_id", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["company_id"], ["companies.id"]),
    )
    op.create_index("ix_jobs_slug", "jobs", ["slug"], unique=True)
    op.create_index("ix_jobs_department", "jobs", ["department"])
    op.create_index("ix_jobs_employment_type", "jobs", ["employment_type"])
    op.create_index("ix_jobs_status", "jobs", ["status"])
    op.create_index("ix_jobs_author_id", "jobs", ["author_id"])
    op.create_index("ix_jobs_company_id", "jobs", ["company_id"])
    op.create_index("ix_jobs_created_at", "jobs", ["created_at"])

    op.create_table(
        "info_fields",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("key", sa.String(), nullable=False),
        sa.Column("label", sa.String(), nullable=False),
        sa.Column("field_type", sa.String(), nullable=False),
        sa.Column("placeholder", sa.String(), nullable=True),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("options", sa.String(), nullable=True),
        sa.Column("is_default", sa.Boolean(), nullable=False),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_info_fields_key", "info_fields", ["key"], unique=True)

    op.create_table(
        "job_form_fields",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("job_id", sa.Integer(), nullable=False),
        sa.Column("field_id", sa.Integer(), nullable=False),
        sa.Column("field_state", field_state, nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["job_id"], ["jobs.id"]),
        sa.ForeignKeyConstraint(["field_id"], ["info_fields.id"]),
        sa.UniqueConstraint("job_id", "field_id", name="uq_job_form_fields_job_field"),
    )
    op.create_index("ix_job_form_fields_job_id", "job_form_fields", ["job_id"])
    op.create_index("ix_job_form_fields_field_id", "job_form_fields", ["field_id"])

    op.create_table(
        "applications",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("job_id", sa.Integer(), nullable=False),
        sa.Column("applicant_id", sa.Integer(), nullable=False),
        sa.Column("status", application_status, nullable=False),
        sa.Column("source", sa.String(), nullable=True),
        sa.Column("cover_letter", sa.Text(), nullable=True),
        sa.Column("resume_url", sa.String(), nullable=True),
        sa.Column("form_responses", sa.String(), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=True),
        sa.Column("recruiter_notes", sa.String(), nullable=True),
        sa.Column("applied_at", sa.DateTime(), nullable=False),
        sa.Column("status_updated_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["job_id"], ["jobs.id"]),
        sa.ForeignKeyConstraint(["applicant_id"], ["users.id"]),
        sa.UniqueConstraint("job_id", "applicant_id", name="uq_applications_job_applicant"),
    )
    op.create_index("ix_applications_job_id", "applications", ["job_id"])
    op.create_index("ix_applications_applicant_id", "applications", ["applicant_id"])
    op.create_index("ix_applications_status", "applications", ["status"])
    op.create_index("ix_applications_applied_at", "applications", ["applied_at"])

    op.create_table(
        "application_notes",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("application_id", sa.Integer(), nullable=False),
        sa.Column("author_id", sa.Integer(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("is_internal", sa.Boolean(), nullable=False),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["application_id"], ["applications.id"]),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"]),
    )
    op.create_index("ix_application_notes_application_id", "application_notes", ["application_id"])
    op.create_index("ix_application_notes_created_at", "application_notes", ["created_at"])

    # Qurban administration
    op.create_table(
        "tipe_hewan",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("nama", sa.String(), nullable=False),
        sa.Column("icon", sa.String(), nullable=True),
        sa.Column("target", sa.Integer(), nullable=False),
        sa.Column("harga", sa.Integer(), nullable=False),
        sa.Column("harga_kolektif", sa.Integer(), nullable=True),
        sa.Column("jenis", jenis_hewan, nullable=False),
        sa.Column("keterangan", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_tipe_hewan_nama", "tipe_hewan", ["nama"], unique=True)
    op.create_index("ix_tipe_hewan_jenis", "tipe_hewan", ["jenis"])

    op.create_table(
        "mudhohi",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("nama_pengqurban", sa.String(), nullable=False),
        sa.Column("nama_peruntukan", sa.String(), nullable=True),
        sa.Column("alamat", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("pesan_khusus", sa.String(), nullable=True),
        sa.Column("keterangan", sa.String(), nullable=True),
        sa.Column("potong_sendiri", sa.Boolean(), nullable=False),
        sa.Column("ambil_daging", sa.Boolean(), nullable=False),
        sa.Column("sudah_ambil_daging", sa.Boolean(), nullable=False),
        sa.Column("dash_code", sa.String(), nullable=False),
        sa.Column("barcode", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
    )
    op.create_index("ix_mudhohi_user_id", "mudhohi", ["user_id"])
    op.create_index("ix_mudhohi_nama_pengqurban", "mudhohi", ["nama_pengqurban"])
    op.create_index("ix_mudhohi_dash_code", "mudhohi", ["dash_code"], unique=True)
    op.create_index("ix_mudhohi_created_at", "mudhohi", ["created_at"])

    op.create_table(
        "pembayaran",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("mudhohi_id", sa.Integer(), nullable=False),
        sa.Column("tipe_id", sa.Integer(), nullable=True),
        sa.Column("cara_bayar", cara_bayar, nullable=False),
        sa.Column("payment_status", payment_status, nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("is_kolektif", sa.Boolean(), nullable=False),
        sa.Column("total_amount", sa.Integer(), nullable=False),
        sa.Column("dibayarkan", sa.Integer(), nullable=False),
        sa.Column("kode_resi", sa.String(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["mudhohi_id"], ["mudhohi.id"]),
        sa.ForeignKeyConstraint(["tipe_id"], ["tipe_hewan.id"]),
    )
    op.create_index("ix_pembayaran_mudhohi_id", "pembayaran", ["mudhohi_id"], unique=True)
    op.create_index("ix_pembayaran_payment_status", "pembayaran", ["payment_status"])

    op.create_table(
        "hewan",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("hewan_id", sa.String(), nullable=False),
        sa.Column("tipe_id", sa.Integer(), nullable=False),
        sa.Column("jenis", jenis_hewan, nullable=False),
        sa.Column("mudhohi_id", sa.Integer(), nullable=True),
        sa.Column("status", hewan_status, nullable=False),
        sa.Column("slaughtered", sa.Boolean(), nullable=False),
        sa.Column("slaughtered_at", sa.DateTime(), nullable=True),
        sa.Column("on_inventory", sa.Boolean(), nullable=False),
        sa.Column("received", sa.Boolean(), nullable=False),
        sa.Column("is_kolektif", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["tipe_id"], ["tipe_hewan.id"]),
        sa.ForeignKeyConstraint(["mudhohi_id"], ["mudhohi.id"]),
        sa.UniqueConstraint("jenis", "hewan_id", name="uq_hewan_jenis_label"),
    )
    op.create_index("ix_hewan_hewan_id", "hewan", ["hewan_id"])
    op.create_index("ix_hewan_tipe_id", "hewan", ["tipe_id"])
    op.create_index("ix_hewan_jenis", "hewan", ["jenis"])
    op.create_index("ix_hewan_mudhohi_id", "hewan", ["mudhohi_id"])
    op.create_index("ix_hewan_created_at", "hewan", ["created_at"])

    op.create_table(
        "produk_hewan",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("nama", sa.String(), nullable=False),
        sa.Column("tipe_id", sa.Integer(), nullable=True),
        sa.Column("jenis_hewan", jenis_hewan, nullable=True),
        sa.Column("jenis_produk", jenis_produk, nullable=False),
        sa.Column("berat", sa.Float(), nullable=True),
        sa.Column("avg_prod_per_hewan", sa.Integer(), nullable=False),
        sa.Column("target_paket", sa.Integer(), nullable=False),
        sa.Column("di_timbang", sa.Integer(), nullable=False),
        sa.Column("di_inventori", sa.Integer(), nullable=False),
        sa.Column("sdh_diserahkan", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["tipe_id"], ["tipe_hewan.id"]),
    )
    op.create_index("ix_produk_hewan_jenis_produk", "produk_hewan", ["jenis_produk"])

    op.create_table(
        "product_logs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("produk_id", sa.Integer(), nullable=False),
        sa.Column("event", sa.String(), nullable=False),
        sa.Column("place", sa.String(), nullable=False),
        sa.Column("value", sa.Integer(), nullable=False),
        sa.Column("note", sa.String(), nullable=True),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["produk_id"], ["produk_hewan.id"]),
    )
    op.create_index("ix_product_logs_produk_id", "product_logs", ["produk_id"])
    op.create_index("ix_product_logs_place", "product_logs", ["place"])
    op.create_index("ix_product_logs_timestamp", "product_logs", ["timestamp"])

    op.create_table(
        "error_logs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("produk_id", sa.Integer(), nullable=True),
        sa.Column("event", sa.String(), nullable=False),
        sa.Column("note", sa.String(), nullable=False),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["produk_id"], ["produk_hewan.id"]),
    )
    op.create_index("ix_error_logs_produk_id", "error_logs", ["produk_id"])
    op.create_index("ix_error_logs_timestamp", "error_logs", ["timestamp"])

    op.create_table(
        "shipments",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("status", shipment_status, nullable=False),
        sa.Column("catatan", sa.String(), nullable=True),
        sa.Column("products", sa.String(), nullable=False),
        sa.Column("waktu_kirim", sa.DateTime(), nullable=False),
        sa.Column("waktu_terima", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_shipments_status", "shipments", ["status"])

    op.create_table(
        "kupon",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("kupon_id", sa.String(), nullable=False),
        sa.Column("status", kupon_status, nullable=False),
        sa.Column("mudhohi_id", sa.Integer(), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["mudhohi_id"], ["mudhohi.id"]),
    )
    op.create_index("ix_kupon_kupon_id", "kupon", ["kupon_id"], unique=True)
    op.create_index("ix_kupon_status", "kupon", ["status"])

    op.create_table(
        "distribusi",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("kategori", sa.String(), nullable=False),
        sa.Column("target", sa.Integer(), nullable=False),
        sa.Column("realisasi", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "penerima",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("distribusi_id", sa.Integer(), nullable=False),
        sa.Column("kupon_id", sa.Integer(), nullable=True),
        sa.Column("nama", sa.String(), nullable=False),
        sa.Column("diterima_oleh", sa.String(), nullable=True),
        sa.Column("no_identitas", sa.String(), nullable=True),
        sa.Column("alamat", sa.String(), nullable=True),
        sa.Column("telepon", sa.String(), nullable=True),
        sa.Column("keterangan", sa.String(), nullable=True),
        sa.Column("jenis_penerima", sa.String(), nullable=True),
        sa.Column("received", sa.Boolean(), nullable=False),
        sa.Column("waktu_terima", sa.DateTime(), nullable=True),
        sa.Column("produk_distribusi", sa.String(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["distribusi_id"], ["distribusi.id"]),
        sa.ForeignKeyConstraint(["kupon_id"], ["kupon.id"]),
    )
    op.create_index("ix_penerima_distribusi_id", "penerima", ["distribusi_id"])

    # Bookkeeping
    op.create_table(
        "transaction_categories",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("type", transaction_type, nullable=False),
        sa.Column("color", sa.String(), nullable=False),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_transaction_categories_type", "transaction_categories", ["type"])

    op.create_table(
        "transactions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("description", sa.String(), nullable=False),
        sa.Column("type", transaction_type, nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column("receipt_url", sa.String(), nullable=True),
        sa.Column("created_by", sa.Integer(), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["category_id"], ["transaction_categories.id"]),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"]),
    )
    op.create_index("ix_transactions_type", "transactions", ["type"])
    op.create_index("ix_transactions_category_id", "transactions", ["category_id"])
    op.create_index("ix_transactions_date", "transactions", ["date"])

    op.create_table(
        "budgets",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.Column("amount", sa.Integer(), nullable=False),
        sa.Column("start_date", sa.DateTime(), nullable=True),
        sa.Column("end_date", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["category_id"], ["transaction_categories.id"]),
    )
    op.create_index("ix_budgets_category_id", "budgets", ["category_id"])

    # Site settings
    op.create_table(
        "settings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("key", sa.String(), nullable=False),
        sa.Column("value", sa.Text(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_settings_key", "settings", ["key"], unique=True)

    op.create_table(
        "itikaf_settings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("local_quota", sa.Integer(), nullable=False),
        sa.Column("free_quota", sa.Integer(), nullable=False),
        sa.Column("woman_ratio", sa.String(), nullable=False),
        sa.Column("registration_open_date", sa.Date(), nullable=False),
        sa.Column("registration_closed_date", sa.Date(), nullable=False),
        sa.Column("itikaf_start_date", sa.Date(), nullable=False),
        sa.Column("attendance_open_time", sa.String(), nullable=False),
        sa.Column("attendance_close_time", sa.String(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "custom_groups",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=False),
        sa.Column("item_count", sa.Integer(), nullable=False),
        sa.Column("animal_type", animal_group_type, nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "images",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("url", sa.String(), nullable=False),
        sa.Column("alt", sa.String(), nullable=True),
        sa.Column("related_id", sa.String(), nullable=False),
        sa.Column("related_type", sa.String(), nullable=False),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_images_related_id", "images", ["related_id"])
    op.create_index("ix_images_related_type", "images", ["related_type"])

    # Seed default data
    now = datetime.utcnow()

    info_fields = sa.table(
        "info_fields",
        sa.column("key", sa.String),
        sa.column("label", sa.String),
        sa.column("field_type", sa.String),
        sa.column("is_default", sa.Boolean),
        sa.column("created_at", sa.DateTime),
    )
    default_fields = [
        ("full_name", "Full Name", "text"),
        ("email", "Email", "email"),
        ("phone", "Phone Number", "tel"),
        ("domicile", "Domicile", "text"),
        ("resume", "Resume", "file"),
        ("cover_letter", "Cover Letter", "textarea"),
        ("portfolio", "Portfolio URL", "url"),
        ("linkedin", "LinkedIn Profile", "url"),
        ("salary_expectation", "Salary Expectation", "number"),
        ("years_experience", "Years of Experience", "number"),
        ("skills", "Technical Skills", "text"),
        ("notice_period", "Notice Period", "text"),
    ]
    op.bulk_insert(
        info_fields,
        [
            {"key": key, "label": label, "field_type": field_type, "is_default": True, "created_at": now}
            for key, label, field_type in default_fields
        ],
    )

    categories = sa.table(
        "transaction_categories",
        sa.column("name", sa.String),
        sa.column("type", transaction_type),
        sa.column("color", sa.String),
        sa.column("created_at", sa.DateTime),
    )
    default_categories = [
        ("Penjualan Hewan Qurban", "PEMASUKAN", "#10b981"),
        ("Donasi", "PEMASUKAN", "#3b82f6"),
        ("Pembelian Hewan", "PENGELUARAN", "#ef4444"),
        ("Operasional", "PENGELUARAN", "#f59e0b"),
        ("Konsumsi Panitia", "PENGELUARAN", "#8b5cf6"),
    ]
    op.bulk_insert(
        categories,
        [{"name": name, "type": type_, "color": color, "created_at": now} for name, type_, color in default_categories],
    )

    tipe_hewan = sa.table(
        "tipe_hewan",
        sa.column("nama", sa.String),
        sa.column("icon", sa.String),
        sa.column("target", sa.Integer),
        sa.column("harga", sa.Integer),
        sa.column("harga_kolektif", sa.Integer),
        sa.column("jenis", jenis_hewan),
        sa.column("created_at", sa.DateTime),
        sa.column("updated_at", sa.DateTime),
    )
    op.bulk_insert(
        tipe_hewan,
        [
            {
                "nama": "Sapi",
                "icon": "🐄",
                "target": 10,
                "harga": 21000000,
                "harga_kolektif": 3000000,
                "jenis": "SAPI",
                "created_at": now,
                "updated_at": now,
            },
            {
                "nama": "Domba",
                "icon": "🐑",
                "target": 50,
                "harga": 2800000,
                "harga_kolektif": None,
                "jenis": "DOMBA",
                "created_at": now,
                "updated_at": now,
            },
        ],
    )


def downgrade() -> None:
    for table in (
        "itikaf_settings",
        "images",
        "custom_groups",
        "settings",
        "budgets",
        "transactions",
        "transaction_categories",
        "penerima",
        "distribusi",
        "kupon",
        "shipments",
        "error_logs",
        "product_logs",
        "produk_hewan",
        "hewan",
        "pembayaran",
        "mudhohi",
        "tipe_hewan",
        "application_notes",
        "applications",
        "job_form_fields",
        "info_fields",
        "jobs",
        "companies",
        "addresses",
        "password_reset_tokens",
        "verification_tokens",
        "other_user_info",
        "profiles",
        "users",
    ):
        op.drop_table(table)

    # Drop the enum types
    bind = op.get_bind()
    if bind.dialect.name == "postgresql":
        for name, values in ENUM_VALUES.items():
            ENUM(*values, name=name).drop(bind, checkfirst=True)
