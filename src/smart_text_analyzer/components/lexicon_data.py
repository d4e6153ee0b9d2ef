"""
Встроенные словари для анализа тональности, эмоций и стоп-слов.

Совпадения ищутся подстрокой в очищенном тексте: термин не должен быть
подстрокой частых слов («hate» в «whatever», «mad» в «made», «rage» в «average»),
поэтому такие слова заданы словосочетаниями («i hate», «hate this»).
"""

SENTIMENT_LEXICON = {
    'positive': [
        'good', 'great', 'excellent', 'awesome', 'fantastic', 'amazing',
        'wonderful', 'perfect', 'love', 'happy', 'joy', 'positive',
        'best', 'better', 'recommend', 'excited', 'pleased', 'satisfied',
        'brilliant', 'outstanding', 'superb', 'delightful', 'beautiful',
        'impressive', 'glad', 'grateful', 'thankful', 'nice', 'helpful',
        'success', 'favorite', 'incredible', 'terrific', 'pleasant',
        'marvelous', 'cheerful', 'thrilled', 'enjoyable', 'reliable', 'smooth',
    ],
    'negative': [
        'bad', 'poor', 'terrible', 'awful', 'horrible', 'worst',
        'hated', 'hates', 'hateful', 'angry', 'sad', 'disappointed',
        'negative', 'problem', 'issue', 'error', 'fail', 'broken', 'wrong',
        'annoying', 'frustrating', 'useless', 'waste', 'ugly', 'boring',
        'disgusting', 'unhappy', 'painful', 'mediocre', 'complaint', 'regret',
        'lousy', 'pathetic', 'dreadful', 'inferior', 'unacceptable', 'worse',
        'refund', 'scam', 'defective', 'i hate', 'hate this', 'hate that',
        'hate it', 'hate you',
    ],
    'neutral': [
        'average', 'normal', 'standard', 'typical', 'moderate', 'regular',
        'usual', 'ordinary', 'acceptable', 'adequate', 'neutral', 'decent',
        'reasonable', 'expected', 'common', 'fair', 'medium', 'basic',
        'general', 'factual', 'objective', 'balanced', 'mixed',
        'sufficient', 'routine', 'informational', 'indifferent', 'unbiased',
        'consistent', 'okay', 'alright',
    ],
}


EMOTION_LEXICON = {
    'joy': [
        'happy', 'joy', 'excited', 'great', 'wonderful', 'amazing',
        'fantastic', 'delighted', 'cheerful', 'glad', 'thrilled', 'pleased',
        'elated', 'smile', 'laugh', 'funny', 'celebrate', 'awesome', 'yay',
        'grateful', 'blessed', 'ecstatic', 'jolly', 'merry', 'proud',
        'satisfied', 'hopeful', 'excellent',
    ],
    'sadness': [
        'sad', 'unhappy', 'depressed', 'miserable', 'terrible', 'awful',
        'hurt', 'crying', 'cried', 'tears', 'lonely', 'grief', 'sorrow',
        'heartbroken', 'gloomy', 'disappointed', 'regret', 'hopeless',
        'despair', 'mourn', 'upset', 'sorry', 'melancholy', 'devastated',
        'broken', 'weep', 'miss you', 'lost',
    ],
    'anger': [
        'angry', 'furious', 'annoyed', 'frustrated', 'raging', 'hatred',
        'hated', 'irritated', 'outraged', 'livid', 'resentful', 'hostile',
        'fed up', 'infuriating', 'pissed', 'disgusted', 'bitter', 'enraged',
        'offended', 'lost my temper', 'yelled', 'yelling', 'scream', 'fury', 'irate',
        'annoying', 'aggravated', 'wrath', 'unacceptable', 'i hate', 'hate this',
        'hate that', 'hate it', 'hate you',
    ],
    'fear': [
        'scared', 'afraid', 'fear', 'terrified', 'anxious', 'worried',
        'nervous', 'panic', 'frightened', 'dread', 'horror', 'alarmed',
        'uneasy', 'threat', 'danger', 'scary', 'phobia',
        'trembling', 'insecure', 'apprehensive', 'stress', 'concerned',
        'petrified', 'spooked', 'creepy',
    ],
    'surprise': [
        'surprise', 'shocked', 'amazed', 'astonish', 'unexpected', 'wow',
        'stunned', 'sudden', 'speechless', 'unbelievable', 'startled',
        'astounded', 'incredible', 'whoa', 'bewildered', 'out of nowhere',
        'never expected', 'can not believe', 'cannot believe', 'jaw',
    ],
    'love': [
        'love', 'adore', 'cherish', 'affection', 'darling', 'sweetheart',
        'romance', 'romantic', 'passion', 'caring', 'devoted', 'fond',
        'tender', 'beloved', 'soulmate', 'intimate', 'embrace', 'hugs',
        'hugged', 'kiss', 'compassion', 'admire', 'warmth', 'lovely',
    ],
    'neutral': [
        'alright', 'okay', 'normal', 'usual', 'regular', 'ordinary',
        'average', 'routine', 'standard', 'typical', 'calm', 'neutral',
        'indifferent', 'moderate', 'nothing special', 'as expected',
        'so so', 'fair enough', 'steady', 'balanced', 'composed',
        'casual', 'informative', 'factual',
    ],
}


STOPWORDS = [
    'a', 'about', 'above', 'after', 'again', 'against', 'all', 'also', 'am',
    'an', 'and', 'any', 'are', 'as', 'at', 'be', 'because', 'been', 'before',
    'being', 'below', 'between', 'both', 'but', 'by', 'can', 'cannot', 'could',
    'did', 'do', 'does', 'doing', 'done', 'down', 'during', 'each', 'even',
    'ever', 'every', 'few', 'for', 'from', 'further', 'get', 'gets', 'got',
    'had', 'has', 'have', 'having', 'he', 'her', 'here', 'hers', 'herself',
    'him', 'himself', 'his', 'how', 'however', 'i', 'if', 'in', 'into', 'is',
    'it', 'its', 'itself', 'just', 'let', 'like', 'made', 'make', 'many', 'may',
    'me', 'might', 'more', 'most', 'much', 'must', 'my', 'myself', 'never',
    'no', 'nor', 'not', 'now', 'of', 'off', 'often', 'on', 'once', 'one',
    'only', 'or', 'other', 'our', 'ours', 'ourselves', 'out', 'over', 'own',
    'per', 'quite', 'rather', 'really', 'same', 'say', 'said', 'says', 'see',
    'seen', 'she', 'should', 'since', 'so', 'some', 'still', 'such', 'than',
    'that', 'the', 'their', 'theirs', 'them', 'themselves', 'then', 'there',
    'these', 'they', 'this', 'those', 'though', 'through', 'thus', 'to',
    'too', 'under', 'until', 'up', 'upon', 'us', 'use', 'used', 'very', 'via',
    'was', 'way', 'we', 'well', 'were', 'what', 'when', 'where', 'whether',
    'which', 'while', 'who', 'whom', 'whose', 'why', 'will', 'with', 'within',
    'without', 'would', 'yet', 'you', 'your', 'yours', 'yourself',
    'yourselves',
]
