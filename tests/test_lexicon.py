from oncotriage.config.vocabulary import TriageVocabulary, find_specialty_collisions, SpecialtyRule
from oncotriage.utils.lexicon import extract_key_phrases, extract_medical_terms, extract_symptoms


def test_extract_symptoms_headache_and_fever():
    assert extract_symptoms("我头痛发热") == ["头痛", "发热"]


def test_extract_symptoms_is_substring_and_deduplicated():
    # "关节痛" is matched as a whole keyword; repeats are reported once
    symptoms = extract_symptoms("关节痛，关节痛，还有咳嗽")
    assert symptoms == ["关节痛", "咳嗽"]


def test_extract_symptoms_is_case_sensitive():
    vocabulary = TriageVocabulary(symptom_keywords=("Fever",))
    assert extract_symptoms("fever since monday", vocabulary) == []
    assert extract_symptoms("Fever since monday", vocabulary) == ["Fever"]


def test_extract_symptoms_no_match_is_empty():
    assert extract_symptoms("今天感觉很好") == []


def test_extract_medical_terms():
    terms = extract_medical_terms("化疗后复查血常规和CT")
    assert terms == ["化疗", "血常规", "CT"]


def test_extract_key_phrases_keeps_order_and_trims():
    phrases = extract_key_phrases(" 我头痛。 昨天开始发热！ 没有咳嗽 ")
    assert phrases == ["我头痛", "昨天开始发热", "没有咳嗽"]


def test_extract_key_phrases_drops_empty_segments():
    assert extract_key_phrases("头痛。。!?  .发热") == ["头痛", "发热"]


def test_extract_key_phrases_caps_at_five():
    phrases = extract_key_phrases("a. b. c. d. e. f. g.")
    assert phrases == ["a", "b", "c", "d", "e"]


def test_specialty_collisions_default_vocabulary_has_none():
    assert find_specialty_collisions(TriageVocabulary()) == {}


def test_specialty_collisions_reports_overlap():
    vocabulary = TriageVocabulary(
        specialty_rules=(
            SpecialtyRule(specialty="皮肤科", symptoms=("红斑", "瘙痒")),
            SpecialtyRule(specialty="内科", symptoms=("发热", "红斑")),
        )
    )
    assert find_specialty_collisions(vocabulary) == {"红斑": ["皮肤科", "内科"]}
