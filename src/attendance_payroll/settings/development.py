import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# "memory" keeps records in process; "mysql" uses DB_CONFIG
STORAGE = os.getenv("STORAGE", "memory")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_payroll"),
}

# If enabled, app will create the tables on startup (CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# Overrides for payroll.rates.PayrollRates, e.g. PF_RATE=0.10
PAYROLL_RATES = {
    "pf_rate": os.getenv("PF_RATE"),
    "esi_rate": os.getenv("ESI_RATE"),
    "tax_rate": os.getenv("TAX_RATE"),
}
