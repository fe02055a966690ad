# client/gen_data.py
import random

FIRST = ["Alex","Jamie","Taylor","Jordan","Sam","Avery","Casey","Riley","Morgan","Quinn","Jesse","Cameron"]
LAST  = ["Chen","Garcia","Patel","Santos","Lee","Kim","Johnson","Brown","Wilson","Martinez","Davis","Nguyen"]
CHARGES = ["Theft","DUI","Assault","Burglary","Possession","Trespass","Fraud"]

# Messy spellings as they show up in court exports, with rough weights
ETHNICITIES = [
    ("Hispanic", 30), ("HISPANIC", 10), ("hispanic or latino", 8), ("Latino", 5),
    ("White", 10), ("white ", 4), ("White, Non-Hispanic", 4),
    ("Black", 5), ("African American", 3),
    ("Asian", 3), ("American Indian", 2), ("Alaska Native", 1),
    ("Native Hawaiian", 1), ("Pacific Islander", 1),
    ("Unknown", 6), ("Two or More Races", 3), ("", 4),
]

def _name(): return f"{random.choice(FIRST)} {random.choice(LAST)}"
def _case(): return f"CR-{random.randint(10000,99999)}"

def gen_defendant_record():
    labels, weights = zip(*ETHNICITIES)
    return {
        "Case Number": _case(),
        "Defendant": _name(),
        "Charge": random.choice(CHARGES),
        "Ethnicity": random.choices(labels, weights=weights, k=1)[0],
    }
