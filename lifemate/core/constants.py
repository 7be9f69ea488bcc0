# Healthcare specializations
SPECIALIZATIONS = (
    "General Medicine",
    "Cardiology",
    "Neurology",
    "Orthopedics",
    "Pediatrics",
    "Gynecology",
    "Dermatology",
    "Psychiatry",
    "Radiology",
    "Anesthesiology",
    "Emergency Medicine",
    "Internal Medicine",
    "Surgery",
    "Oncology",
    "Pathology",
    "Ophthalmology",
    "ENT",
    "Urology",
    "Gastroenterology",
    "Pulmonology",
    "Endocrinology",
    "Rheumatology",
    "Nephrology",
    "Hematology",
    "Infectious Disease",
    "Physical Therapy",
    "Occupational Therapy",
    "Speech Therapy",
    "Nursing",
    "Pharmacy",
    "Medical Technology",
    "Other",
)

DEGREES = (
    "MBBS",
    "MD",
    "MS",
    "BDS",
    "MDS",
    "BPT",
    "MPT",
    "BSc Nursing",
    "MSc Nursing",
    "BPharm",
    "MPharm",
    "BSc",
    "MSc",
    "PhD",
    "Diploma",
    "Certificate",
    "Other",
)

SKILL_LEVELS = ("Beginner", "Intermediate", "Advanced", "Expert")
PORTFOLIO_TYPES = ("Document", "Image", "Video", "Link")

# Job preferences
JOB_TYPES = ("Full-time", "Part-time", "Contract", "Freelance", "Internship", "Volunteer")
SHIFTS = ("Day", "Night", "Rotating", "Flexible")
CURRENCIES = ("INR", "USD", "EUR", "GBP")
SALARY_PERIODS = ("Hourly", "Daily", "Monthly", "Annual")
AVAILABILITY = ("Immediately", "2 weeks", "1 month", "2 months", "3 months", "Negotiable")
REMOTE_PREFERENCES = ("On-site only", "Remote only", "Hybrid", "No preference")

# Defaults
DEFAULT_SKILL_LEVEL = "Intermediate"
DEFAULT_PORTFOLIO_TYPE = "Link"
DEFAULT_COUNTRY = "India"
DEFAULT_CURRENCY = "INR"
DEFAULT_SALARY_PERIOD = "Annual"
DEFAULT_AVAILABILITY = "Negotiable"
DEFAULT_REMOTE_PREFERENCE = "No preference"

# Ranges
MAX_EXPERIENCE_YEARS = 50
MIN_COMPLETION_YEAR = 1950
COMPLETION_YEAR_LOOKAHEAD = 5  # years past the current year

# Profile completion
COMPLETION_STEP = 10

# User roles
ROLE_JOBSEEKER = "jobseeker"
ROLE_EMPLOYER = "employer"
USER_ROLES = (ROLE_JOBSEEKER, ROLE_EMPLOYER)

# Database
DEFAULT_LIMIT = 100
DEFAULT_OFFSET = 0

# Email Templates
VERIFICATION_TEMPLATE = "email/verify_email.html"
PASSWORD_RESET_TEMPLATE = "email/password_reset.html"
APPLICATION_NOTIFICATION_TEMPLATE = "email/application_notification.html"
INTERVIEW_INVITATION_TEMPLATE = "email/interview_invitation.html"
WELCOME_TEMPLATE = "email/welcome.html"

# Link lifetimes (stated in the emails, enforced elsewhere)
VERIFICATION_LINK_TTL_HOURS = 24
PASSWORD_RESET_LINK_TTL_HOURS = 1

DISPLAY_DATE_FORMAT = "%d %B %Y"
