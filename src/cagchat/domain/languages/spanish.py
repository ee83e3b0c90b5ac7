"""Spanish language profile."""

import re
from types import MappingProxyType

from cagchat.domain.languages.profile import LanguageProfile, freeze_corpus

_SUFFIXES = (
    "s",
    "es",
    "mente",
    "ico",
    "ica",
    "icos",
    "icas",
    "ado",
    "ada",
    "ados",
    "adas",
)

# Plural endings that replace the final syllable instead of extending it.
_PLURAL_REWRITES = (
    (re.compile(r"ción$"), "ciones"),
    (re.compile(r"dad$"), "dades"),
    (re.compile(r"z$"), "ces"),
)


def derive_forms(word: str) -> list[str]:
    """Plural, adverb, adjective and participle forms of a Spanish word."""
    forms = [word + suffix for suffix in _SUFFIXES]
    forms.append(re.sub(r"o$", "a", word))
    for pattern, replacement in _PLURAL_REWRITES:
        if pattern.search(word):
            forms.append(pattern.sub(replacement, word))
    return forms


TOPIC_CORPUS = freeze_corpus(
    {
        "technology": [
            "tecnología", "programación", "inteligencia artificial", "datos",
            "web", "desarrollo", "software", "hardware", "redes", "internet",
            "app", "aplicación", "móvil", "computadora", "robot",
            "automatización", "código", "algoritmo", "sistema", "informática",
            "computación", "ciberseguridad", "nube", "servidor", "dispositivo",
            "blockchain",
        ],
        "science": [
            "ciencia", "matemáticas", "física", "química", "biología",
            "astronomía", "laboratorio", "experimento", "teoría", "científico",
            "investigación", "elementos", "molecular", "átomo", "célula",
            "genética", "evolución",
        ],
        "health": [
            "medicina", "salud", "enfermedad", "tratamiento", "diagnóstico",
            "síntomas", "terapia", "anatomía", "fisiología", "nutrición",
            "paciente", "hospital", "doctor", "médico", "farmacia",
            "medicamento", "cirugía", "rehabilitación", "psicología",
            "psiquiatría", "terapéutico",
        ],
        "humanities": [
            "historia", "geografía", "política", "economía", "finanzas",
            "arte", "música", "literatura", "cine", "educación", "filosofía",
            "sociedad", "cultura", "religión", "idioma", "lenguaje",
            "antropología", "arqueología", "sociología", "lingüística",
            "etimología", "gramática",
        ],
        "lifestyle": [
            "deporte", "viajes", "cocina", "gastronomía", "moda", "decoración",
            "jardinería", "mascotas", "animales", "naturaleza",
            "medio ambiente", "turismo", "recetas", "hogar", "bricolaje",
            "ejercicio", "dieta", "nutrición", "estilo de vida", "bienestar",
            "belleza", "cosmética",
        ],
        "business": [
            "legal", "derecho", "negocios", "emprendimiento", "marketing",
            "empresa", "corporación", "startup", "gestión", "administración",
            "ventas", "comercio", "importación", "exportación", "contabilidad",
            "finanzas", "inversión", "mercado", "publicidad",
            "recursos humanos",
        ],
    }
)

# Simulated number of documents (out of 1000) containing each term.
DOCUMENT_FREQUENCY = MappingProxyType(
    {
        # very common
        "información": 850, "tiempo": 830, "día": 800, "persona": 780,
        "problema": 750, "trabajo": 730, "cosa": 700, "parte": 680,
        "vida": 650, "forma": 620, "manera": 600, "ejemplo": 580, "caso": 560,
        "sistema": 550, "proceso": 540,
        # common, topic independent
        "importante": 500, "diferente": 480, "bueno": 470, "general": 450,
        "grande": 440, "principal": 420, "necesario": 400, "posible": 380,
        "pequeño": 360, "fácil": 340, "difícil": 320, "simple": 300,
        "último": 280, "nuevo": 270, "viejo": 260,
        # less common, topic specific
        "tecnología": 250, "programa": 240, "datos": 230, "desarrollo": 220,
        "internet": 210, "ciencia": 200, "arte": 190, "política": 180,
        "economía": 170, "historia": 160, "medicina": 150, "educación": 140,
        "computadora": 130, "aplicación": 120, "red": 110,
        # specialized
        "algoritmo": 90, "inteligencia": 85, "artificial": 80, "robótica": 75,
        "blockchain": 70, "ciberseguridad": 65, "neurología": 60,
        "cuántico": 55, "nanotecnología": 50, "genómica": 45,
    }
)

SPANISH = LanguageProfile(
    code="es",
    name="Spanish",
    common_words=frozenset(
        {
            "el", "la", "los", "las", "un", "una", "unos", "unas", "y", "o",
            "a", "ante", "bajo", "con", "de", "desde", "en", "entre", "hacia",
            "hasta", "para", "por", "según", "sin", "sobre", "tras", "que",
            "esto", "esta", "estos", "qué", "cómo", "cuándo", "dónde",
            "quién", "cuál", "ser", "estar", "tener", "hacer", "decir", "ir",
            "ver", "dar", "más", "menos", "poco", "mucho",
        }
    ),
    interrogatives=(
        "qué", "cuál", "quién", "cómo", "dónde", "cuándo", "por qué", "cuánto",
    ),
    default_title="Nueva conversación",
    generic_titles=("Nueva conversación", "Untitled", "Sin título"),
    topic_prefix="Conversación sobre",
    other_topics_text="y otros temas",
    conjunction="y",
    default_system_prompt=(
        "Eres un asistente amable y útil que responde de forma clara y organizada."
    ),
    markers=(
        "el", "la", "los", "las", "de", "en", "que", "por", "con", "para",
        "como", "está", "qué", "cómo",
    ),
    derive_forms=derive_forms,
    topic_corpus=TOPIC_CORPUS,
    document_frequency=DOCUMENT_FREQUENCY,
    special_chars="áéíóúüñ¿¡",
    special_char_bonus=5,
    technical_suffixes=("ción", "miento", "ología", "ística", "logía", "nomía"),
    common_prefixes=("sobre", "sub", "re", "pre", "con", "des"),
    memory_label="Usuario preguntó sobre",
    concepts_label="Conceptos clave",
    entities_label="Entidades",
)
