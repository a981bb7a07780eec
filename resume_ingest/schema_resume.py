# canonical profile schema (empty values – every key always present)
import copy

PROFILE_SCHEMA = {
    "skills": [],
    "contact": {"name": None, "email": None, "phone": None, "location": None},
    "summary": "",
    "experience": [],
    "education": [],
    "certifications": [],
    "languages": [],
    "links": [],
}

PROFILE_KEYS = tuple(PROFILE_SCHEMA)
CONTACT_KEYS = tuple(PROFILE_SCHEMA["contact"])
EXPERIENCE_KEYS = ("title", "company", "start_date", "end_date", "responsibilities")

# compact form used inside prompts
SCHEMA_HINT = (
    "{skills:[string], contact:{name,email,phone,location}, summary:string, "
    "experience:[{title,company,start_date,end_date,responsibilities:[string]}], "
    "education:[{degree,institution,year}], certifications:[string], "
    "languages:[string], links:[string]}"
)


def empty_profile() -> dict:
    return copy.deepcopy(PROFILE_SCHEMA)
