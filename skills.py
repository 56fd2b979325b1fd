# skills.py
# Central keyword knowledge base shared by the matcher, the estimators and the profile extractor.

# The "key" is the canonical skill name (lower-cased).
# The "value" lists every surface form accepted for it (case-insensitivity is handled by the matcher).

SKILL_VARIATIONS = {
    # --- Languages ---
    "javascript": ["js", "javascript", "java script", "ecmascript", "es6", "es2015", "vanilla js"],
    "typescript": ["typescript", "ts"],
    "python": ["python", "py", "python3"],
    "java": ["java", "core java", "java se", "java ee"],
    "php": ["php", "php7", "php8"],
    "ruby": ["ruby", "ruby on rails", "rails"],
    "go": ["go", "golang"],
    "rust": ["rust", "rust-lang"],
    "swift": ["swift", "swiftui"],
    "kotlin": ["kotlin"],
    "sql": ["sql", "structured query language", "t-sql", "pl/sql"],

    # --- Frameworks & libraries ---
    "react": ["react", "reactjs", "react.js", "react js"],
    "angular": ["angular", "angularjs", "angular.js", "angular js"],
    "vue": ["vue", "vuejs", "vue.js", "vue js"],
    "node.js": ["node", "nodejs", "node.js", "node js"],
    "express": ["express", "expressjs", "express.js", "express js"],
    "bootstrap": ["bootstrap", "bootstrap css"],
    "tailwind": ["tailwind", "tailwindcss", "tailwind css"],
    "streamlit": ["streamlit"],

    # --- Databases ---
    "mongodb": ["mongodb", "mongo", "mongo db"],
    "mysql": ["mysql", "my sql"],
    "postgresql": ["postgresql", "postgres", "postgre sql", "psql"],

    # --- Markup ---
    "html": ["html", "html5", "hypertext markup language"],
    "css": ["css", "css3", "cascading style sheets"],

    # --- Tooling & cloud ---
    "git": ["git", "github", "gitlab", "version control"],
    "docker": ["docker", "containerization", "containers"],
    "aws": ["aws", "amazon web services", "ec2", "s3"],
    "azure": ["azure", "microsoft azure"],
    "api": ["api", "apis", "rest api", "restful api", "restful"],

    # --- Roles & practices ---
    "frontend": ["frontend", "front-end", "front end", "ui development"],
    "backend": ["backend", "back-end", "back end", "server-side"],
    "fullstack": ["fullstack", "full-stack", "full stack"],
    "web development": ["web development", "web dev", "website development"],
    "ui/ux": ["ui/ux", "ui", "ux", "user interface", "user experience"],
    "testing": ["testing", "unit testing", "test automation", "qa"],
    "agile": ["agile", "scrum", "kanban"],

    # --- Data & analytics ---
    "data science": ["data science", "data scientist", "data analysis", "data analytics"],
    "data visualization": ["data visualization", "data viz", "visualization", "dashboards"],
    "power bi": ["power bi", "powerbi", "power-bi"],
    "tableau": ["tableau"],
    "machine learning": ["machine learning", "ml", "deep learning", "ai", "artificial intelligence"],

    # --- GIS ---
    "qgis": ["qgis"],
    "arcgis": ["arcgis", "arc gis"],
    "gis": ["gis", "geographic information system", "geographic information systems"],
}

# Words that may precede a skill on the same line and still count as a mention.
CONTEXT_HEADERS = [
    "skills",
    "technologies",
    "experience",
    "proficient",
    "familiar",
    "knowledge",
    "areas",
    "technical",
    "interest",
    "expertise",
]

# Filler tokens dropped when a skill list is parsed from free text.
SKILL_STOP_WORDS = {
    "and",
    "or",
    "with",
    "using",
    "including",
    "such as",
    "like",
    "etc",
    "year",
    "years",
    "experience",
    "knowledge",
    "familiar",
    "proficient",
    "expert",
    "beginner",
    "intermediate",
    "advanced",
}

# --- Experience signals ---
ACTION_VERBS = [
    "experience",
    "worked",
    "developed",
    "managed",
    "led",
    "created",
    "built",
    "designed",
    "implemented",
]
SENIORITY_TITLES = ["senior", "lead", "principal", "architect", "manager", "director"]

# --- Education ladder (lowest to highest) ---
EDUCATION_LADDER = ["high_school", "associate", "bachelor", "master", "phd"]
EDUCATION_KEYWORDS = {
    "high_school": ["high school", "diploma", "ged"],
    "associate": ["associate", "aa", "as", "community college"],
    "bachelor": ["bachelor", "ba", "bs", "undergraduate", "college", "university"],
    "master": ["master", "ma", "ms", "mba", "graduate"],
    "phd": ["phd", "doctorate", "doctoral", "ph.d"],
    "bootcamp": ["bootcamp", "certification", "certificate", "coding bootcamp"],
}
EDUCATION_ALIASES = {
    "high school": "high_school",
    "highschool": "high_school",
    "secondary": "high_school",
    "associates": "associate",
    "associate's": "associate",
    "bachelors": "bachelor",
    "bachelor's": "bachelor",
    "undergraduate": "bachelor",
    "masters": "master",
    "master's": "master",
    "graduate": "master",
    "doctorate": "phd",
    "doctoral": "phd",
    "ph.d": "phd",
    "ph.d.": "phd",
    "coding bootcamp": "bootcamp",
    "no requirement": "none",
    "not required": "none",
}
TECH_FIELDS = [
    "computer science",
    "software engineering",
    "information technology",
    "computer engineering",
    "web development",
]

# --- Role-specific technical keywords ---
ROLE_KEYWORDS = {
    "frontend": ["html", "css", "javascript", "react", "vue", "angular", "typescript", "sass", "webpack", "responsive"],
    "backend": ["api", "database", "server", "node.js", "python", "java", "sql", "mongodb", "postgresql", "microservices"],
    "fullstack": ["frontend", "backend", "full-stack", "javascript", "react", "node.js", "database", "api"],
    "mobile": ["android", "ios", "react-native", "flutter", "swift", "kotlin", "mobile", "app"],
    "devops": ["docker", "kubernetes", "aws", "azure", "jenkins", "ci/cd", "terraform", "ansible", "monitoring"],
    "data": ["python", "sql", "pandas", "numpy", "machine-learning", "tensorflow", "pytorch", "data-analysis"],
    "qa": ["testing", "automation", "selenium", "cypress", "junit", "test-cases", "quality-assurance"],
}
ROLE_HINTS = [
    ("frontend", ["frontend", "front-end", "ui"]),
    ("backend", ["backend", "back-end", "api"]),
    ("mobile", ["mobile", "android", "ios"]),
    ("devops", ["devops", "infrastructure"]),
    ("data", ["data", "analyst", "scientist"]),
    ("qa", ["qa", "test", "quality"]),
]

# --- Soft-skill signals ---
TEAMWORK_SIGNALS = [
    "team",
    "teams",
    "teamwork",
    "collaborated",
    "collaboration",
    "cross-functional",
    "stakeholder",
    "mentored",
    "volunteer",
    "communication",
]
LEADERSHIP_SIGNALS = [
    "led",
    "lead",
    "leadership",
    "managed",
    "mentored",
    "supervised",
    "coordinated",
    "head of",
    "owner",
    "spearheaded",
]
SECTION_HEADERS = [
    "summary",
    "objective",
    "experience",
    "education",
    "skills",
    "projects",
    "certifications",
    "achievements",
]

# --- Profile extraction keyword lists ---
PROFILE_LOCATIONS = ["bangalore", "mumbai", "delhi", "hyderabad", "chennai", "pune", "kolkata", "india"]
PROFILE_LANGUAGES = [
    "javascript", "typescript", "python", "java", "c++", "c#", "php", "ruby",
    "go", "rust", "swift", "kotlin", "dart", "scala", "r",
]
PROFILE_FRAMEWORKS = [
    "react", "angular", "vue", "node.js", "express", "django", "flask",
    "spring", "laravel", "rails", "next.js", "nuxt.js",
]
PROFILE_DATABASES = ["mongodb", "mysql", "postgresql", "redis", "elasticsearch", "cassandra", "sqlite", "oracle"]
PROFILE_TOOLS = ["git", "docker", "kubernetes", "jenkins", "webpack", "babel", "npm", "yarn", "maven", "gradle"]
PROFILE_CLOUD = ["aws", "azure", "gcp", "google cloud", "heroku", "digitalocean"]
PROFILE_OTHER = [
    "machine learning", "data science", "rest api", "graphql", "microservices",
    "power bi", "tableau", "qgis", "arcgis", "agile",
]
DEGREE_KEYWORDS = ["bachelor", "master", "phd", "b.tech", "b.e", "m.tech", "m.e", "mba", "bca", "mca"]
FIELD_KEYWORDS = ["computer science", "information technology", "software engineering", "data science", "electronics"]
CERTIFICATION_PHRASES = {
    "aws certified": "AWS Certified",
    "azure certified": "Azure Certified",
    "google cloud": "Google Cloud Certified",
    "oracle certified": "Oracle Certified",
    "microsoft certified": "Microsoft Certified",
}
