"""Data access for patients and their attached records."""