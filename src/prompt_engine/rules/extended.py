"""
Rule tables for the extended domains.

These domains carry a lighter overlay than the core five: one or two
required sections, a short checklist and the anti-patterns that matter most
for the field.
"""

from ..domains import Domain, Template
from ..models import Severity
from .base import (
    AntiPattern,
    ChecklistField,
    DomainRules,
    EnhancementRule,
    ExamplePair,
    OverlaySection,
    keywords,
    vocab,
)

MOBILE_RULES = DomainRules(
    domain=Domain.MOBILE,
    description="Native and cross-platform mobile applications",
    persona="You are a senior mobile engineer who ships native iOS and Android apps.",
    persona_title="a senior mobile engineer",
    default_template=Template.BASIC,
    output_format="Deliver the screens, the navigation flow and the platform code in fenced code blocks.",
    preferred_verb="Build",
    keywords=keywords(
        (r"mobile", 3.0),
        (r"ios|iphone|ipad", 3.0),
        (r"android", 3.0),
        (r"react native|flutter|swiftui|jetpack compose", 3.0),
        (r"swift|kotlin", 2.0),
        (r"app store|play store", 2.5),
        (r"push notifications?", 2.0),
        (r"offline mode|offline sync", 1.5),
    ),
    vocabulary=vocab(
        "ios", "android", "swift", "swiftui", "kotlin", "flutter", "react",
        "native", "screen", "navigation", "push", "notification", "offline",
        "sync", "gesture", "tablet", "phone", "store", "permission", "biometric",
        "battery", "app",
    ),
    overlay_sections=(
        OverlaySection("Platforms", "Target iOS 16+ and Android 10+ unless the task names other versions."),
        OverlaySection("Device constraints", "Support offline use and keep cold start under 2 seconds on mid-range devices."),
    ),
    enhancements=(
        EnhancementRule(r"push notifications?", "Request notification permission in context and support deep links"),
        EnhancementRule(r"offline|sync", "Queue writes locally and resolve sync conflicts deterministically"),
        EnhancementRule(r"payments?|purchases?", "Use the platform in-app purchase APIs"),
    ),
    checklist=(
        ChecklistField("platform", r"^Platforms:|\b(?:ios|android|cross-platform)\b", "Target platforms"),
        ChecklistField("device", r"^Device constraints:|\b(?:offline|battery|screen sizes?)\b", "Device constraints"),
    ),
    constraints=(
        "Keep the app bundle under 50 MB.",
        "Follow the Apple Human Interface Guidelines and Material Design 3.",
    ),
    success_criteria=(
        "Every screen renders on 5.4-inch and 6.7-inch displays without clipping.",
        "The app passes App Store and Play Store review on first submission.",
    ),
    default_requirements=(
        "Define the navigation flow between screens",
        "Handle loss of network connectivity",
    ),
    examples=(
        ExamplePair(
            input="make an app for tracking runs",
            output="Build a Flutter running tracker for iOS and Android that records GPS routes offline, "
                   "shows pace per kilometer and syncs runs when connectivity returns.",
        ),
    ),
    anti_patterns=(
        AntiPattern(
            code="MOBILE_MISSING_PLATFORM",
            category="missing-context",
            severity=Severity.MEDIUM,
            message="Mobile request does not name the target platform.",
            pattern=r"\b(?:ios|android|cross-platform|flutter|react native)\b",
            mode="absent",
        ),
    ),
)

WEB_RULES = DomainRules(
    domain=Domain.WEB,
    description="Websites, landing pages and web applications",
    persona="You are a full-stack web developer who builds accessible, SEO-friendly sites.",
    persona_title="a full-stack web developer",
    default_template=Template.BASIC,
    output_format="Deliver semantic HTML, CSS and JavaScript in separate fenced code blocks.",
    preferred_verb="Build",
    keywords=keywords(
        (r"websites?|web ?sites?", 3.0),
        (r"web apps?|web applications?", 3.0),
        (r"landing pages?|web pages?|homepage", 2.5),
        (r"seo", 2.5),
        (r"html|css", 2.0),
        (r"responsive", 1.5),
        (r"browsers?", 1.0),
        (r"wordpress|cms", 2.0),
    ),
    vocabulary=vocab(
        "html", "css", "javascript", "seo", "responsive", "viewport", "page",
        "landing", "hero", "cta", "navbar", "footer", "browser", "wcag",
        "lighthouse", "cms", "domain", "https", "meta", "sitemap",
    ),
    overlay_sections=(
        OverlaySection("Browser support", "Support the latest 2 versions of Chrome, Firefox, Safari and Edge."),
        OverlaySection("Accessibility", "Meet WCAG 2.1 AA, including keyboard navigation and alt text on every image."),
    ),
    enhancements=(
        EnhancementRule(r"landing pages?|homepage", "Include a hero section with one primary call to action"),
        EnhancementRule(r"seo", "Add meta tags, a sitemap and structured data"),
        EnhancementRule(r"responsive|mobile", "Use mobile-first breakpoints at 640, 768 and 1024 pixels"),
    ),
    checklist=(
        ChecklistField("browsers", r"^Browser support:|\b(?:browsers?|chrome|safari|firefox)\b", "Browser support"),
        ChecklistField("accessibility", r"^Accessibility:|\b(?:wcag|accessib(?:le|ility)|a11y)\b", "Accessibility"),
    ),
    constraints=(
        "Keep Largest Contentful Paint under 2.5 seconds.",
        "Ship no more than 200 KB of JavaScript on first load.",
    ),
    success_criteria=(
        "Lighthouse reports a score of 90 or higher for performance and accessibility.",
        "Every page validates against the W3C HTML validator.",
    ),
    default_requirements=(
        "Use semantic HTML landmarks",
        "Provide responsive layouts for phone, tablet and desktop",
    ),
    examples=(
        ExamplePair(
            input="make a website for my bakery",
            output="Build a responsive 4-page bakery website with a menu, an online order form and "
                   "a location map, meeting WCAG 2.1 AA.",
        ),
    ),
    anti_patterns=(
        AntiPattern(
            code="WEB_MISSING_ACCESSIBILITY",
            category="missing-constraint",
            severity=Severity.LOW,
            message="Web request does not mention accessibility requirements.",
            pattern=r"\b(?:wcag|accessib(?:le|ility)|a11y|screen readers?)\b",
            mode="absent",
        ),
    ),
)

BACKEND_RULES = DomainRules(
    domain=Domain.BACKEND,
    description="APIs, services and server-side systems",
    persona="You are a backend engineer who designs reliable, well-tested services.",
    persona_title="a senior backend engineer",
    default_template=Template.BASIC,
    output_format="Deliver the endpoint contract, the data model and the service code in fenced code blocks.",
    preferred_verb="Implement",
    keywords=keywords(
        (r"backend|back-end", 3.0),
        (r"rest(?:ful)? apis?|graphql|grpc", 3.0),
        (r"endpoints?", 2.0),
        (r"apis?", 1.5),
        (r"microservices?", 2.5),
        (r"servers?", 1.0),
        (r"authentication|authorization", 1.0),
        (r"django|flask|fastapi|express|spring boot|node\.?js", 2.5),
        (r"caching|redis|message queues?|kafka|rabbitmq", 2.0),
    ),
    vocabulary=vocab(
        "api", "rest", "graphql", "grpc", "endpoint", "service", "microservice",
        "server", "http", "json", "database", "cache", "redis", "queue",
        "kafka", "jwt", "oauth", "authentication", "rate", "pagination",
        "idempotent", "status", "latency", "python", "fastapi", "django",
    ),
    overlay_sections=(
        OverlaySection("API contract", "Document every endpoint with method, path, request body, response body and status codes."),
        OverlaySection("Error handling", "Return structured JSON errors with a machine-readable code and an HTTP status."),
    ),
    enhancements=(
        EnhancementRule(r"apis?|endpoints?", "Version the API under a /v1 prefix and paginate list endpoints"),
        EnhancementRule(r"auth(?:entication|orization)?|login", "Use short-lived JWT access tokens with refresh tokens"),
        EnhancementRule(r"caching|cache|redis", "Define cache keys, TTLs and invalidation rules"),
        EnhancementRule(r"queues?|kafka|rabbitmq|jobs?", "Make consumers idempotent and retry with exponential backoff"),
    ),
    checklist=(
        ChecklistField("contract", r"^API contract:|\b(?:endpoints?|openapi|schema)\b", "API contract"),
        ChecklistField("errors", r"^Error handling:|\b(?:errors?|status codes?|retries)\b", "Error handling"),
    ),
    constraints=(
        "Keep p99 latency under 200 ms at 500 requests per second.",
        "Validate every request body against a schema.",
    ),
    success_criteria=(
        "Unit and integration tests cover every endpoint.",
        "The OpenAPI document matches the implemented routes.",
    ),
    default_requirements=(
        "Define the request and response schema for each endpoint",
        "Log every request with a correlation id",
    ),
    examples=(
        ExamplePair(
            input="make an api for todos",
            output="Implement a FastAPI service exposing CRUD endpoints under /v1/tasks with "
                   "pagination, JWT authentication and PostgreSQL persistence.",
        ),
    ),
    anti_patterns=(
        AntiPattern(
            code="BACKEND_MISSING_ERROR_HANDLING",
            category="missing-context",
            severity=Severity.LOW,
            message="Backend request does not describe error handling.",
            pattern=r"\b(?:errors?|status codes?|exceptions?|retr(?:y|ies))\b",
            mode="absent",
        ),
    ),
)

FRONTEND_RULES = DomainRules(
    domain=Domain.FRONTEND,
    description="User interface components and client-side applications",
    persona="You are a frontend engineer who builds accessible component libraries.",
    persona_title="a senior frontend engineer",
    default_template=Template.BASIC,
    output_format="Deliver each component in a fenced code block with props documented in a table.",
    preferred_verb="Build",
    keywords=keywords(
        (r"frontend|front-end", 3.0),
        (r"react|vue|angular|svelte|next\.?js", 2.5),
        (r"components?", 1.5),
        (r"ui|user interface", 1.5),
        (r"state management|redux|zustand", 2.5),
        (r"tailwind|styled components|css modules", 2.0),
        (r"storybook|design system", 2.0),
    ),
    vocabulary=vocab(
        "react", "vue", "angular", "svelte", "component", "props", "state",
        "hook", "redux", "tailwind", "css", "typescript", "ui", "ux",
        "storybook", "accessibility", "aria", "render", "modal", "button",
        "input", "form", "validation",
    ),
    overlay_sections=(
        OverlaySection("Component API", "List every prop with type, default value and whether the prop is required."),
        OverlaySection("Accessibility", "Use ARIA roles, visible focus states and full keyboard support."),
    ),
    enhancements=(
        EnhancementRule(r"forms?|inputs?", "Validate every input on blur and show inline error messages"),
        EnhancementRule(r"state|redux", "Keep server state and UI state in separate stores"),
        EnhancementRule(r"components?", "Write a Storybook story for every component variant"),
    ),
    checklist=(
        ChecklistField("framework", r"\b(?:react|vue|angular|svelte|next\.?js)\b", "UI framework"),
        ChecklistField("accessibility", r"^Accessibility:|\b(?:aria|wcag|keyboard|accessib(?:le|ility))\b",
                       "Accessibility"),
    ),
    constraints=(
        "Write every component in TypeScript with strict mode enabled.",
        "Keep each component under 200 lines.",
    ),
    success_criteria=(
        "Every component passes axe accessibility checks.",
        "Unit tests cover every prop combination listed in the Component API.",
    ),
    default_requirements=(
        "Define loading, empty and error states",
        "Support light and dark themes",
    ),
    examples=(
        ExamplePair(
            input="make a modal dialog",
            output="Build a React modal component in TypeScript with focus trapping, Escape-to-close "
                   "and an aria-labelledby title.",
        ),
    ),
    anti_patterns=(
        AntiPattern(
            code="FRONTEND_MISSING_FRAMEWORK",
            category="missing-context",
            severity=Severity.LOW,
            message="Frontend request does not name a UI framework.",
            pattern=r"\b(?:react|vue|angular|svelte|next\.?js|vanilla)\b",
            mode="absent",
        ),
    ),
)

AI_RULES = DomainRules(
    domain=Domain.AI,
    description="Machine learning models, LLM applications and data science",
    persona="You are a machine learning engineer who takes models from experiment to production.",
    persona_title="a machine learning engineer",
    default_template=Template.CHAIN_OF_THOUGHT,
    output_format="Deliver the approach, the training or inference code, and the evaluation results as a table.",
    preferred_verb="Design",
    keywords=keywords(
        (r"machine learning|deep learning|\bml", 3.0),
        (r"artificial intelligence|ai", 2.5),
        (r"neural networks?|transformers?", 2.5),
        (r"llms?|gpt|chatbots?|rag", 2.5),
        (r"models?", 1.0),
        (r"training|fine-?tun(?:e|ing)|datasets?", 1.5),
        (r"embeddings?|vector (?:db|database|store)", 2.0),
        (r"classification model|regression model|computer vision|nlp", 2.5),
    ),
    vocabulary=vocab(
        "model", "dataset", "training", "inference", "accuracy", "precision",
        "recall", "f1", "auc", "embedding", "transformer", "llm", "gpt",
        "token", "fine-tuning", "pytorch", "tensorflow", "scikit-learn",
        "feature", "label", "validation", "baseline", "latency", "gpu", "rag",
    ),
    overlay_sections=(
        OverlaySection("Data", "Describe the dataset size, label source and the train, validation and test split."),
        OverlaySection("Evaluation", "Report accuracy, precision, recall and F1 against a named baseline."),
    ),
    enhancements=(
        EnhancementRule(r"training|fine-?tun(?:e|ing)", "Fix random seeds and log every hyperparameter"),
        EnhancementRule(r"llms?|gpt|chatbots?|rag", "Define guardrails and an evaluation set of 50 real queries"),
        EnhancementRule(r"production|deploy(?:ment)?|inference", "Set a latency budget and monitor model drift"),
    ),
    checklist=(
        ChecklistField("data", r"^Data:|\b(?:datasets?|training data|labels?)\b", "Data description"),
        ChecklistField("metrics", r"^Evaluation:|\b(?:accuracy|precision|recall|f1|auc|metrics?)\b",
                       "Evaluation metrics"),
    ),
    constraints=(
        "Keep inference latency under 300 ms per request on a single GPU.",
        "Use only data with a documented license.",
    ),
    success_criteria=(
        "The model beats the baseline by at least 5 points of F1 on the held-out test set.",
        "Results are reproducible from the logged seeds and hyperparameters.",
    ),
    default_requirements=(
        "Define the baseline model",
        "Describe the evaluation protocol",
    ),
    reasoning_steps=(
        "Define the prediction target and the success metric.",
        "Describe the data and the split strategy.",
        "Choose a baseline and a candidate model.",
        "Compare the candidate against the baseline on the held-out set.",
    ),
    examples=(
        ExamplePair(
            input="make an ai that reads emails",
            output="Design a transformer-based email classifier that routes support emails into 6 "
                   "categories with at least 90% macro F1 on a 2,000-email test set.",
        ),
    ),
    anti_patterns=(
        AntiPattern(
            code="AI_MISSING_METRIC",
            category="missing-success-criterion",
            severity=Severity.MEDIUM,
            message="AI request does not name an evaluation metric.",
            pattern=r"\b(?:accuracy|precision|recall|f1|auc|bleu|rouge|metrics?|evaluation)\b",
            mode="absent",
        ),
    ),
)

GAMING_RULES = DomainRules(
    domain=Domain.GAMING,
    description="Game design, mechanics and game development",
    persona="You are a game designer who has shipped titles on PC and console.",
    persona_title="a veteran game designer",
    default_template=Template.ROLE_BASED,
    output_format="Deliver a game design document section with mechanics, progression and balancing tables.",
    preferred_verb="Design",
    keywords=keywords(
        (r"games?|gaming", 3.0),
        (r"gameplay|game mechanics|game loop", 2.5),
        (r"unity|unreal|godot", 2.5),
        (r"players?|npcs?", 1.5),
        (r"levels?|quests?|boss(?:es)?", 1.0),
        (r"multiplayer|co-op|pvp", 2.0),
        (r"rpg|fps|platformer|roguelike", 2.5),
    ),
    vocabulary=vocab(
        "player", "npc", "level", "quest", "mechanic", "loop", "progression",
        "xp", "loot", "boss", "multiplayer", "pvp", "unity", "unreal", "godot",
        "rpg", "fps", "platformer", "roguelike", "difficulty", "balance",
        "spawn", "inventory", "controller",
    ),
    overlay_sections=(
        OverlaySection("Core loop", "Describe the 30-second, 5-minute and session-length gameplay loops."),
        OverlaySection("Target platform", "Name the platforms and the input devices the design supports."),
    ),
    enhancements=(
        EnhancementRule(r"levels?|quests?", "Define the difficulty curve across the first 10 levels"),
        EnhancementRule(r"multiplayer|pvp|co-op", "Specify matchmaking rules and server authority for game state"),
        EnhancementRule(r"loot|economy|rewards?", "Balance reward rates with a sink for every currency"),
    ),
    checklist=(
        ChecklistField("loop", r"^Core loop:|\b(?:core loop|gameplay loop|mechanics?)\b", "Core loop"),
        ChecklistField("platform", r"^Target platform:|\b(?:pc|console|switch|playstation|xbox|steam)\b",
                       "Target platform"),
    ),
    constraints=(
        "Hold 60 frames per second on the minimum target hardware.",
        "Keep the tutorial under 10 minutes of play.",
    ),
    success_criteria=(
        "A new player completes the first level without external help.",
        "Playtesters rate the core loop 4 out of 5 or higher.",
    ),
    default_requirements=(
        "Define the player goal and the fail state",
        "Describe the progression system",
    ),
    examples=(
        ExamplePair(
            input="make a zombie game",
            output="Design a co-op zombie survival shooter for PC with a 20-minute session loop, "
                   "4 player classes and a crafting system balanced around scarce ammunition.",
        ),
    ),
    anti_patterns=(
        AntiPattern(
            code="GAMING_MISSING_PLATFORM",
            category="missing-context",
            severity=Severity.LOW,
            message="Game request does not name a target platform.",
            pattern=r"\b(?:pc|console|mobile|switch|playstation|xbox|steam|web)\b",
            mode="absent",
        ),
    ),
)

CRYPTO_RULES = DomainRules(
    domain=Domain.CRYPTO,
    description="Blockchain, smart contracts and digital assets",
    persona="You are a blockchain engineer who writes audited smart contracts.",
    persona_title="a senior blockchain engineer",
    default_template=Template.CHAIN_OF_THOUGHT,
    output_format="Deliver the contract code in a fenced code block, then a security review of every external call.",
    preferred_verb="Write",
    keywords=keywords(
        (r"crypto(?:currenc(?:y|ies))?|blockchain", 3.0),
        (r"bitcoin|ethereum|solana|polygon", 3.0),
        (r"smart contracts?|solidity|rust contracts?", 3.0),
        (r"nfts?|defi|web3|dao", 2.5),
        (r"tokens?|erc-?20|erc-?721", 1.0),
        (r"wallets?", 1.5),
        (r"staking|liquidity pools?", 2.0),
    ),
    vocabulary=vocab(
        "blockchain", "ethereum", "bitcoin", "solana", "solidity", "contract",
        "token", "erc-20", "erc-721", "nft", "defi", "wallet", "gas", "mainnet",
        "testnet", "audit", "reentrancy", "oracle", "staking", "dao", "evm",
        "openzeppelin",
    ),
    overlay_sections=(
        OverlaySection("Network", "Target Ethereum mainnet with deployment tested on the Sepolia testnet first."),
        OverlaySection("Security", "Guard against reentrancy and integer overflow, and use OpenZeppelin libraries."),
    ),
    enhancements=(
        EnhancementRule(r"tokens?|erc-?20", "Follow the ERC-20 standard and emit events on every transfer"),
        EnhancementRule(r"nfts?|erc-?721", "Follow the ERC-721 standard and store metadata on IPFS"),
        EnhancementRule(r"defi|staking|liquidity", "Model the economic attack surface, including flash loans"),
    ),
    checklist=(
        ChecklistField("network", r"^Network:|\b(?:mainnet|testnet|ethereum|solana|polygon|bitcoin)\b",
                       "Target network"),
        ChecklistField("security", r"^Security:|\b(?:audit|reentrancy|security)\b", "Security review"),
    ),
    constraints=(
        "Keep gas cost under 100,000 per transfer.",
        "Never store private keys in contract code or configuration files.",
    ),
    success_criteria=(
        "The contract passes Slither analysis with no high-severity findings.",
        "Unit tests cover every public function with at least 95% line coverage.",
    ),
    default_requirements=(
        "Define access control for every privileged function",
        "Emit events for every state change",
    ),
    reasoning_steps=(
        "Define the assets, actors and trust assumptions.",
        "Design the contract state and the public functions.",
        "Identify attack vectors for every external call.",
        "Write the contract and the tests that cover every attack vector.",
    ),
    examples=(
        ExamplePair(
            input="make a token",
            output="Write an ERC-20 token contract in Solidity 0.8 with a fixed supply of 1,000,000 "
                   "tokens, owner-only minting disabled after launch, and OpenZeppelin base contracts.",
        ),
    ),
    anti_patterns=(
        AntiPattern(
            code="CRYPTO_MISSING_SECURITY",
            category="missing-constraint",
            severity=Severity.HIGH,
            message="Blockchain request does not mention a security review or audit.",
            pattern=r"\b(?:audit|security|reentrancy|vulnerab(?:le|ility|ilities))\b",
            mode="absent",
        ),
    ),
)

EDUCATION_RULES = DomainRules(
    domain=Domain.EDUCATION,
    description="Lesson plans, courses and learning materials",
    persona="You are an instructional designer who builds outcome-based curricula.",
    persona_title="an experienced instructional designer",
    default_template=Template.FEW_SHOT,
    output_format="Deliver the learning objectives, the lesson sequence and an assessment with an answer key.",
    preferred_verb="Create",
    keywords=keywords(
        (r"lesson plans?|curriculum|syllabus", 3.0),
        (r"students?|learners?|pupils?", 2.0),
        (r"teach(?:ing|ers?)?|courses?|classes", 2.0),
        (r"quiz(?:zes)?|exams?|assessments?|homework", 1.5),
        (r"tutorials?|workshops?", 1.5),
        (r"classroom|k-12|grade \d+|university", 2.0),
        (r"learning objectives?|bloom", 2.5),
    ),
    vocabulary=vocab(
        "lesson", "curriculum", "syllabus", "student", "learner", "objective",
        "outcome", "assessment", "quiz", "rubric", "grade", "module", "unit",
        "exercise", "activity", "bloom", "k-12", "university", "minutes",
        "worksheet",
    ),
    overlay_sections=(
        OverlaySection("Learners", "State the grade level or prior knowledge the learners bring."),
        OverlaySection("Learning objectives", "Write 3 measurable objectives using Bloom's taxonomy verbs."),
    ),
    enhancements=(
        EnhancementRule(r"lessons?|class(?:es)?", "Split the lesson into timed segments that total 45 minutes"),
        EnhancementRule(r"quiz(?:zes)?|exams?|assessments?", "Include an answer key and a grading rubric"),
        EnhancementRule(r"courses?|curriculum|syllabus", "Map every module to at least one learning objective"),
    ),
    checklist=(
        ChecklistField("learners", r"^Learners:|\b(?:students?|learners?|grade|level)\b", "Learner profile"),
        ChecklistField("objectives", r"^Learning objectives:|\bobjectives?\b|\boutcomes?\b",
                       "Learning objectives"),
    ),
    constraints=(
        "Keep each lesson within 45 minutes.",
        "Use reading material at or below the stated grade level.",
    ),
    success_criteria=(
        "80% of learners answer the assessment questions correctly.",
        "Every activity maps to a stated learning objective.",
    ),
    default_requirements=(
        "Include one hands-on activity per lesson",
        "Provide a formative check for understanding",
    ),
    examples=(
        ExamplePair(
            input="teach fractions",
            output="Create a 45-minute grade 4 lesson on equivalent fractions with 3 measurable "
                   "objectives, a pizza-slicing activity and a 5-question exit quiz.",
        ),
        ExamplePair(
            input="course about python",
            output="Create a 6-week introductory Python course for adult beginners with weekly "
                   "coding exercises, a final project and a grading rubric.",
        ),
    ),
    anti_patterns=(
        AntiPattern(
            code="EDUCATION_MISSING_LEVEL",
            category="missing-context",
            severity=Severity.MEDIUM,
            message="Educational request does not state the learner level.",
            pattern=r"\b(?:grade|level|beginners?|intermediate|advanced|k-12|university|age)\b",
            mode="absent",
        ),
    ),
)

HEALTHCARE_RULES = DomainRules(
    domain=Domain.HEALTHCARE,
    description="Clinical, medical and health information systems",
    persona="You are a clinical informatics specialist who works with care teams and privacy officers.",
    persona_title="a clinical informatics specialist",
    default_template=Template.ROLE_BASED,
    output_format="Deliver the answer with cited clinical sources and a note on intended audience.",
    preferred_verb="Create",
    keywords=keywords(
        (r"health(?:care)?|medical|clinical", 3.0),
        (r"patients?", 2.5),
        (r"hipaa|ehr|emr|hl7|fhir", 3.0),
        (r"diagnos(?:is|es|tic)|treatments?|symptoms?", 2.0),
        (r"hospitals?|clinics?|doctors?|nurses?|physicians?", 2.0),
        (r"medications?|prescriptions?|dosage", 2.0),
        (r"telehealth|telemedicine", 3.0),
    ),
    vocabulary=vocab(
        "patient", "clinical", "hipaa", "phi", "ehr", "emr", "fhir", "hl7",
        "diagnosis", "treatment", "symptom", "medication", "dosage", "consent",
        "clinician", "physician", "nurse", "hospital", "triage", "privacy",
        "encryption", "telehealth",
    ),
    overlay_sections=(
        OverlaySection("Privacy", "Treat every patient record as PHI under HIPAA and encrypt PHI at rest and in transit."),
        OverlaySection("Clinical safety", "Add a clinician review step before any output reaches a patient."),
    ),
    enhancements=(
        EnhancementRule(r"patients?|records?|ehr|emr", "Log every access to patient records for audit"),
        EnhancementRule(r"diagnos(?:is|es|tic)|symptoms?", "State that the output supports and never replaces clinical judgment"),
        EnhancementRule(r"integrations?|hl7|fhir", "Exchange data through FHIR R4 resources"),
    ),
    checklist=(
        ChecklistField("privacy", r"^Privacy:|\b(?:hipaa|phi|privacy|consent|gdpr)\b", "Privacy requirements"),
        ChecklistField("safety", r"^Clinical safety:|\b(?:clinician review|clinical safety|disclaimer)\b",
                       "Clinical safety"),
    ),
    constraints=(
        "Share PHI only with authorized care-team members.",
        "Cite peer-reviewed sources for every clinical claim.",
    ),
    success_criteria=(
        "A privacy officer confirms HIPAA compliance of the design.",
        "A licensed clinician approves every clinical statement.",
    ),
    default_requirements=(
        "Identify the clinical users and the patient population",
        "Define consent handling",
    ),
    examples=(
        ExamplePair(
            input="app for patient appointments",
            output="Create a HIPAA-compliant appointment scheduling workflow for outpatient clinics "
                   "with SMS reminders, consent capture and audit logging of PHI access.",
        ),
    ),
    anti_patterns=(
        AntiPattern(
            code="HEALTHCARE_MISSING_PRIVACY",
            category="missing-privacy",
            severity=Severity.HIGH,
            message="Healthcare request does not address patient privacy (HIPAA or equivalent).",
            pattern=r"\b(?:hipaa|phi|privacy|confidential(?:ity)?|consent|gdpr)\b",
            mode="absent",
        ),
    ),
)

FINANCE_RULES = DomainRules(
    domain=Domain.FINANCE,
    description="Banking, payments, investing and financial analysis",
    persona="You are a financial analyst with a CFA charter and fintech engineering experience.",
    persona_title="a chartered financial analyst",
    default_template=Template.CHAIN_OF_THOUGHT,
    output_format="Deliver the analysis with a table of figures, the formulas used and the stated assumptions.",
    preferred_verb="Analyze",
    keywords=keywords(
        (r"financ(?:e|ial)|fintech", 3.0),
        (r"banking|banks?", 2.0),
        (r"payments?|transactions?", 1.5),
        (r"invest(?:ing|ments?)|portfolios?|stocks?|trading|equities", 2.5),
        (r"budget(?:s|ing)?|accounting|forecast(?:s|ing)?|cash flow", 2.0),
        (r"loans?|credit|interest rates?|mortgages?", 2.0),
        (r"kyc|aml|sox|pci(?:-dss)?", 3.0),
        (r"roi|npv|irr|ebitda", 2.5),
    ),
    vocabulary=vocab(
        "finance", "portfolio", "stock", "bond", "equity", "roi", "npv", "irr",
        "ebitda", "revenue", "cash", "flow", "forecast", "budget", "loan",
        "interest", "rate", "kyc", "aml", "pci-dss", "sox", "compliance",
        "ledger", "transaction", "usd", "eur", "quarter", "fiscal",
    ),
    overlay_sections=(
        OverlaySection("Compliance", "Name the regulations that apply, such as PCI-DSS, KYC and AML."),
        OverlaySection("Assumptions", "List currency, time period and data sources for every figure."),
    ),
    enhancements=(
        EnhancementRule(r"payments?|cards?", "Keep card data out of scope by using a PCI-DSS compliant processor"),
        EnhancementRule(r"invest(?:ing|ments?)|portfolios?", "Report risk with volatility and maximum drawdown"),
        EnhancementRule(r"forecast(?:s|ing)?|budget(?:s|ing)?", "Provide base, upside and downside scenarios"),
    ),
    checklist=(
        ChecklistField("compliance", r"^Compliance:|\b(?:compliance|regulat(?:ion|ory)|kyc|aml|pci|sox)\b",
                       "Regulatory compliance"),
        ChecklistField("assumptions", r"^Assumptions:|\b(?:assumptions?|currency|fiscal|period)\b",
                       "Stated assumptions"),
    ),
    constraints=(
        "Express every figure in USD with 2 decimal places unless another currency is named.",
        "Use only data from the last 5 fiscal years.",
    ),
    success_criteria=(
        "Every figure can be traced to a cited data source.",
        "The model reconciles to the reported totals within 0.5%.",
    ),
    default_requirements=(
        "State the time period covered",
        "Separate historical figures from projections",
    ),
    reasoning_steps=(
        "State the financial question and the decision the analysis informs.",
        "Gather the figures and state the assumptions.",
        "Apply the formulas and show intermediate results.",
        "Stress-test the result under downside assumptions.",
    ),
    examples=(
        ExamplePair(
            input="should we buy new equipment",
            output="Analyze the NPV and IRR of a $250,000 equipment investment over 5 years at an 8% "
                   "discount rate, with base, upside and downside cash flow scenarios.",
        ),
    ),
    anti_patterns=(
        AntiPattern(
            code="FINANCE_MISSING_COMPLIANCE",
            category="missing-compliance",
            severity=Severity.MEDIUM,
            message="Financial request does not mention regulatory compliance.",
            pattern=r"\b(?:compliance|complian[tc]|regulat(?:ion|ions|ory)|kyc|aml|pci|sox|sec|finra)\b",
            mode="absent",
        ),
    ),
)

LEGAL_RULES = DomainRules(
    domain=Domain.LEGAL,
    description="Contracts, policies and legal research",
    persona="You are a commercial lawyer who drafts plain-language contracts and policies.",
    persona_title="an experienced commercial lawyer",
    default_template=Template.ROLE_BASED,
    output_format="Deliver numbered clauses with defined terms in bold and a summary of obligations per party.",
    preferred_verb="Draft",
    keywords=keywords(
        (r"legal|law|lawyers?|attorneys?", 3.0),
        (r"contracts?|agreements?", 2.0),
        (r"terms of service|terms and conditions|privacy policy|nda", 3.0),
        (r"clauses?|liability|indemnif(?:y|ication)|litigation", 2.0),
        (r"jurisdictions?|governing law", 2.5),
        (r"compliance|regulat(?:ion|ory)", 1.0),
        (r"intellectual property|copyright|trademarks?|patents?", 2.5),
    ),
    vocabulary=vocab(
        "contract", "agreement", "clause", "party", "parties", "liability",
        "indemnification", "jurisdiction", "governing", "law", "warranty",
        "termination", "confidentiality", "nda", "gdpr", "ccpa", "copyright",
        "trademark", "breach", "remedy", "delaware", "california", "eu",
    ),
    overlay_sections=(
        OverlaySection("Jurisdiction", "Name the governing law and the venue for disputes."),
        OverlaySection("Disclaimer", "State that the draft requires review by a licensed attorney before use."),
    ),
    enhancements=(
        EnhancementRule(r"contracts?|agreements?", "Include termination, liability cap and dispute resolution clauses"),
        EnhancementRule(r"privacy policy|personal data|gdpr|ccpa", "Address data subject rights under GDPR and CCPA"),
        EnhancementRule(r"nda|confidential(?:ity)?", "Define confidential information and the duration of the obligation"),
    ),
    checklist=(
        ChecklistField("jurisdiction", r"^Jurisdiction:|\b(?:jurisdictions?|governing law|state of|laws of)\b",
                       "Jurisdiction"),
        ChecklistField("parties", r"\b(?:part(?:y|ies)|licensor|licensee|employer|employee|vendor)\b",
                       "Parties"),
    ),
    constraints=(
        "Write every clause in plain English at a grade 10 reading level.",
        "Limit the agreement to 10 pages.",
    ),
    success_criteria=(
        "Every obligation names the responsible party and a deadline.",
        "A licensed attorney in the named jurisdiction approves the draft.",
    ),
    default_requirements=(
        "Identify the parties and the effective date",
        "Define every capitalized term",
    ),
    examples=(
        ExamplePair(
            input="nda for my startup",
            output="Draft a mutual NDA between a Delaware startup and a contractor, governed by "
                   "Delaware law, with a 2-year confidentiality term and standard exclusions.",
        ),
    ),
    anti_patterns=(
        AntiPattern(
            code="LEGAL_MISSING_JURISDICTION",
            category="missing-jurisdiction",
            severity=Severity.HIGH,
            message="Legal request does not name a jurisdiction or governing law.",
            pattern=r"\b(?:jurisdictions?|governing law|laws? of|state of|federal|eu|uk|delaware|california|new york)\b",
            mode="absent",
        ),
    ),
)

EXTENDED_RULES = (
    MOBILE_RULES,
    WEB_RULES,
    BACKEND_RULES,
    FRONTEND_RULES,
    AI_RULES,
    GAMING_RULES,
    CRYPTO_RULES,
    EDUCATION_RULES,
    HEALTHCARE_RULES,
    FINANCE_RULES,
    LEGAL_RULES,
)
