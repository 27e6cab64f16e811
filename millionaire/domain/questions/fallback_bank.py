"""Bundled question bank used whenever live questions are unavailable."""

from __future__ import annotations

import math
import random
from typing import Dict, List

from millionaire.domain.questions.errors import FallbackExhausted
from millionaire.domain.questions.models import DIFFICULTIES, Question, sort_by_value
from millionaire.domain.questions.shuffle import take_random

EASY_SHARE = 0.33
MEDIUM_SHARE = 0.33
# Largest set a session asks for; bucket sizes are checked against it at construction
MAX_SAMPLE = 15


def _item(
	question_id: int,
	difficulty: str,
	value: int,
	category: str,
	text: str,
	options: tuple[str, str, str, str],
	correct_idx: int,
) -> Question:
	return Question(
		id=question_id,
		text=text,
		options=options,
		correct_idx=correct_idx,
		category=category,
		difficulty=difficulty,
		value=value,
	)


_BANK: List[Question] = [
	_item(1, "easy", 100, "Science", "Which planet is known as the Red Planet?", ("Venus", "Mars", "Jupiter", "Saturn"), 1),
	_item(2, "easy", 200, "Geography", "Which country is known as the Land of the Rising Sun?", ("China", "Korea", "Japan", "Vietnam"), 2),
	_item(3, "easy", 300, "Art", "Who painted the Mona Lisa?", ("Vincent Van Gogh", "Pablo Picasso", "Leonardo da Vinci", "Michelangelo"), 2),
	_item(4, "easy", 500, "Geography", "What is the capital of Australia?", ("Sydney", "Melbourne", "Perth", "Canberra"), 3),
	_item(5, "easy", 1000, "Science", "Which element has the chemical symbol 'O'?", ("Gold", "Oxygen", "Osmium", "Oganesson"), 1),
	_item(6, "medium", 2000, "Literature", "Who wrote 'Romeo and Juliet'?", ("Charles Dickens", "William Shakespeare", "Jane Austen", "Mark Twain"), 1),
	_item(7, "medium", 4000, "Science", "Which famous scientist developed the theory of relativity?", ("Isaac Newton", "Niels Bohr", "Albert Einstein", "Marie Curie"), 2),
	_item(8, "medium", 8000, "Geography", "What is the largest ocean on Earth?", ("Atlantic Ocean", "Indian Ocean", "Arctic Ocean", "Pacific Ocean"), 3),
	_item(9, "medium", 16000, "Art", "Which of these is NOT a primary color in the RGB color model?", ("Red", "Green", "Blue", "Yellow"), 3),
	_item(10, "hard", 32000, "Science", "Which planet has the most moons?", ("Jupiter", "Saturn", "Uranus", "Neptune"), 1),
	_item(11, "hard", 64000, "History", "In what year did the Berlin Wall fall?", ("1987", "1989", "1991", "1993"), 1),
	_item(12, "hard", 125000, "Technology", "Which of these programming languages was developed first?", ("Python", "Java", "C++", "FORTRAN"), 3),
	_item(13, "hard", 250000, "Music", "Which composer was deaf when he completed his Ninth Symphony?", ("Wolfgang Amadeus Mozart", "Ludwig van Beethoven", "Johann Sebastian Bach", "Franz Schubert"), 1),
	_item(14, "hard", 500000, "History", "The Aztec Empire was located in what is now which country?", ("Peru", "Colombia", "Mexico", "Brazil"), 2),
	_item(15, "hard", 1000000, "Food", "What is the world's most expensive spice by weight?", ("Vanilla", "Cardamom", "Saffron", "Cinnamon"), 2),
	_item(16, "easy", 100, "Science", "Which vitamin is produced by the skin when exposed to sunlight?", ("Vitamin A", "Vitamin C", "Vitamin D", "Vitamin K"), 2),
	_item(17, "easy", 200, "Geography", "What is the capital of France?", ("London", "Berlin", "Paris", "Madrid"), 2),
	_item(18, "easy", 300, "Science", "Which famous physicist developed the theory of general relativity?", ("Isaac Newton", "Albert Einstein", "Stephen Hawking", "Niels Bohr"), 1),
	_item(19, "easy", 500, "Animals", "What is the largest mammal in the world?", ("Elephant", "Blue Whale", "Giraffe", "Hippopotamus"), 1),
	_item(20, "easy", 1000, "Literature", "Who wrote 'Harry Potter'?", ("J.R.R. Tolkien", "J.K. Rowling", "Stephen King", "George R.R. Martin"), 1),
	_item(21, "easy", 100, "Astronomy", "Which planet is closest to the Sun?", ("Venus", "Earth", "Mars", "Mercury"), 3),
	_item(22, "easy", 200, "Geography", "What is the capital of Japan?", ("Beijing", "Seoul", "Tokyo", "Bangkok"), 2),
	_item(23, "easy", 300, "Art", "Who painted 'Starry Night'?", ("Claude Monet", "Pablo Picasso", "Vincent van Gogh", "Leonardo da Vinci"), 2),
	_item(24, "easy", 500, "Science", "What is the chemical symbol for gold?", ("Go", "Gd", "Au", "Ag"), 2),
	_item(25, "easy", 1000, "Geography", "Which country is known for the Taj Mahal?", ("Egypt", "India", "Turkey", "China"), 1),
	_item(26, "easy", 100, "Technology", "Which of these is NOT a programming language?", ("Java", "Python", "Cobra", "Photoshop"), 3),
	_item(27, "easy", 200, "Geography", "What is the capital of Brazil?", ("Rio de Janeiro", "São Paulo", "Brasília", "Salvador"), 2),
	_item(28, "easy", 300, "Astronomy", "Which is the largest planet in our solar system?", ("Saturn", "Jupiter", "Neptune", "Uranus"), 1),
	_item(29, "easy", 500, "History", "Who was the first person to walk on the moon?", ("Buzz Aldrin", "Neil Armstrong", "Yuri Gagarin", "John Glenn"), 1),
	_item(30, "easy", 1000, "Geography", "What is the longest river in the world?", ("Amazon", "Nile", "Mississippi", "Yangtze"), 1),
	_item(31, "easy", 100, "Literature", "Who wrote 'Pride and Prejudice'?", ("Jane Austen", "Charlotte Brontë", "Emily Brontë", "Virginia Woolf"), 0),
	_item(32, "easy", 200, "Geography", "What is the main language spoken in Brazil?", ("Spanish", "Portuguese", "English", "French"), 1),
	_item(33, "easy", 300, "Music", "Which instrument has 88 keys?", ("Guitar", "Violin", "Piano", "Flute"), 2),
	_item(34, "easy", 500, "Science", "What is the chemical symbol for water?", ("O2", "CO2", "H2O", "NaCl"), 2),
	_item(35, "easy", 1000, "Geography", "Which country is known for the Great Barrier Reef?", ("Brazil", "Mexico", "Australia", "Indonesia"), 2),
	_item(36, "easy", 100, "Animals", "Which of these animals is a marsupial?", ("Elephant", "Kangaroo", "Lion", "Penguin"), 1),
	_item(37, "easy", 200, "Geography", "What is the capital of Italy?", ("Venice", "Milan", "Rome", "Naples"), 2),
	_item(38, "easy", 300, "Art", "Who painted the ceiling of the Sistine Chapel?", ("Leonardo da Vinci", "Michelangelo", "Raphael", "Donatello"), 1),
	_item(39, "easy", 500, "Food", "What is the main ingredient in guacamole?", ("Avocado", "Tomato", "Lime", "Onion"), 0),
	_item(40, "easy", 1000, "History", "Which famous ship sank on its maiden voyage in 1912?", ("USS Enterprise", "Queen Mary", "RMS Titanic", "HMS Bounty"), 2),
	_item(41, "easy", 100, "Automotive", "Which sports car company has a prancing horse as its logo?", ("Lamborghini", "Ferrari", "Porsche", "Maserati"), 1),
	_item(42, "easy", 200, "Geography", "What is the largest desert in the world?", ("Sahara", "Gobi", "Arabian", "Antarctic"), 3),
	_item(43, "easy", 300, "Music", "Who is known as the 'King of Pop'?", ("Elvis Presley", "Michael Jackson", "Justin Bieber", "Bruno Mars"), 1),
	_item(44, "easy", 500, "Science", "What is the boiling point of water in Celsius?", ("90°C", "100°C", "110°C", "212°C"), 1),
	_item(45, "easy", 1000, "Astronomy", "Which planet is known as the 'Morning Star'?", ("Mars", "Venus", "Jupiter", "Mercury"), 1),
	_item(46, "medium", 2000, "History", "Which country was the first to reach the South Pole?", ("United States", "Russia", "Norway", "United Kingdom"), 2),
	_item(47, "medium", 4000, "Biology", "What is the largest internal organ in the human body?", ("Lungs", "Liver", "Brain", "Heart"), 1),
	_item(48, "medium", 8000, "Science", "Who discovered penicillin?", ("Marie Curie", "Louis Pasteur", "Alexander Fleming", "Jonas Salk"), 2),
	_item(49, "medium", 16000, "Chemistry", "Which element has the chemical symbol 'Fe'?", ("Iron", "Fluorine", "Francium", "Fermium"), 0),
	_item(50, "medium", 32000, "History", "In which year did World War I begin?", ("1914", "1916", "1918", "1920"), 0),
	_item(51, "medium", 2000, "Geography", "Which mountain range separates Europe from Asia?", ("Alps", "Himalayas", "Andes", "Urals"), 3),
	_item(52, "medium", 4000, "Literature", "Who wrote '1984'?", ("Aldous Huxley", "George Orwell", "Ray Bradbury", "H.G. Wells"), 1),
	_item(53, "medium", 8000, "Geography", "What is the currency of Japan?", ("Yuan", "Won", "Ringgit", "Yen"), 3),
	_item(54, "medium", 16000, "Chemistry", "Which element is a noble gas?", ("Chlorine", "Nitrogen", "Argon", "Carbon"), 2),
	_item(55, "medium", 32000, "Geography", "What is the capital of South Africa?", ("Johannesburg", "Cape Town", "Pretoria", "Durban"), 2),
	_item(56, "medium", 2000, "Music", "Who composed 'The Four Seasons'?", ("Johann Sebastian Bach", "Wolfgang Amadeus Mozart", "Ludwig van Beethoven", "Antonio Vivaldi"), 3),
	_item(57, "medium", 4000, "Politics", "Which of these countries is not a member of the European Union?", ("Sweden", "Switzerland", "Spain", "Portugal"), 1),
	_item(58, "medium", 8000, "Science", "What is the hardest natural substance on Earth?", ("Platinum", "Titanium", "Diamond", "Quartz"), 2),
	_item(59, "medium", 16000, "History", "Which ancient wonder was located in Alexandria?", ("Hanging Gardens", "Colossus", "Lighthouse", "Temple of Artemis"), 2),
	_item(60, "medium", 32000, "Geography", "What is the name of the longest river in Africa?", ("Congo", "Niger", "Zambezi", "Nile"), 3),
	_item(61, "medium", 2000, "Meteorology", "Which of these is not a type of cloud?", ("Cumulus", "Stratus", "Nimbus", "Nebulus"), 3),
	_item(62, "medium", 4000, "Entertainment", "Who directed the movie 'Jaws'?", ("George Lucas", "Steven Spielberg", "Francis Ford Coppola", "Martin Scorsese"), 1),
	_item(63, "medium", 8000, "Animals", "What is the largest species of shark?", ("Great White Shark", "Tiger Shark", "Hammerhead Shark", "Whale Shark"), 3),
	_item(64, "medium", 16000, "History", "Which famous emperor built the Colosseum in Rome?", ("Augustus", "Nero", "Vespasian", "Constantine"), 2),
	_item(65, "medium", 32000, "Technology", "What does HTTP stand for?", ("HyperText Transfer Protocol", "High Tech Transfer Protocol", "Hyper Transfer Text Protocol", "Host Transfer Technology Protocol"), 0),
	_item(66, "medium", 2000, "History", "Which country was not part of the original Axis powers in World War II?", ("Germany", "Italy", "Spain", "Japan"), 2),
	_item(67, "medium", 4000, "Biology", "What is the smallest bone in the human body?", ("Stapes", "Femur", "Radius", "Phalanges"), 0),
	_item(68, "medium", 8000, "Astronomy", "Which planet has the Great Red Spot?", ("Mars", "Venus", "Jupiter", "Saturn"), 2),
	_item(69, "medium", 16000, "Literature", "Who wrote 'The Canterbury Tales'?", ("Geoffrey Chaucer", "William Langland", "John Gower", "Thomas Malory"), 0),
	_item(70, "medium", 32000, "Geography", "Which mountain is the tallest in the world when measured from base to peak?", ("Mount Everest", "K2", "Mauna Kea", "Mount Kilimanjaro"), 2),
	_item(71, "hard", 64000, "Science", "Which of these scientists did NOT contribute to the development of quantum mechanics?", ("Niels Bohr", "Werner Heisenberg", "Stephen Hawking", "Max Planck"), 2),
	_item(72, "hard", 125000, "Geography", "What is the only state in the United States that grows coffee commercially?", ("California", "Florida", "Hawaii", "Louisiana"), 2),
	_item(73, "hard", 250000, "History", "Who was the first female winner of a Nobel Prize?", ("Marie Curie", "Irène Joliot-Curie", "Dorothy Hodgkin", "Rosalind Franklin"), 0),
	_item(74, "hard", 500000, "Literature", "Which is the only Shakespeare play that mentions America?", ("The Tempest", "Hamlet", "Macbeth", "A Midsummer Night's Dream"), 0),
	_item(75, "hard", 1000000, "Biology", "What is the rarest blood type in humans?", ("AB negative", "B negative", "O negative", "A negative"), 0),
	_item(76, "hard", 64000, "Science", "Who was the first person to prove that the Earth revolves around the Sun?", ("Galileo Galilei", "Nicolaus Copernicus", "Johannes Kepler", "Isaac Newton"), 1),
	_item(77, "hard", 125000, "History", "Which of these is NOT one of the Seven Wonders of the Ancient World?", ("Great Pyramid of Giza", "Hanging Gardens of Babylon", "Colosseum of Rome", "Temple of Artemis at Ephesus"), 2),
	_item(78, "hard", 250000, "History", "What was the first country to grant women the right to vote?", ("United States", "United Kingdom", "New Zealand", "France"), 2),
	_item(79, "hard", 500000, "Music", "Which composer was completely deaf when he wrote his Ninth Symphony?", ("Wolfgang Amadeus Mozart", "Ludwig van Beethoven", "Johann Sebastian Bach", "Frédéric Chopin"), 1),
	_item(80, "hard", 1000000, "Geography", "What is the smallest country in the world by land area?", ("Monaco", "Vatican City", "San Marino", "Liechtenstein"), 1),
	_item(81, "hard", 64000, "Politics", "Who was the only U.S. President to resign from office?", ("Richard Nixon", "Lyndon B. Johnson", "Gerald Ford", "Jimmy Carter"), 0),
	_item(82, "hard", 125000, "Chemistry", "Which element was named after the Greek word for 'green'?", ("Oxygen", "Hydrogen", "Chlorine", "Neon"), 2),
	_item(83, "hard", 250000, "Geography", "What is the only sea without any coastlines?", ("Dead Sea", "Red Sea", "Sargasso Sea", "Caspian Sea"), 2),
	_item(84, "hard", 500000, "History", "Which ancient civilization invented the concept of zero?", ("Egyptians", "Greeks", "Mayans", "Indians"), 3),
	_item(85, "hard", 1000000, "Language", "What is the longest English word without a true vowel (a, e, i, o, u)?", ("Rhythm", "Crypt", "Sylph", "Lymph"), 0),
	_item(86, "hard", 64000, "Chemistry", "Which chemical element has the highest melting point?", ("Tungsten", "Carbon", "Titanium", "Osmium"), 0),
	_item(87, "hard", 125000, "Science", "Who was the first woman to win a Nobel Prize in two different fields?", ("Irène Joliot-Curie", "Marie Curie", "Rita Levi-Montalcini", "Dorothy Hodgkin"), 1),
	_item(88, "hard", 250000, "Geography", "What is the oldest continuously inhabited city in the world?", ("Athens, Greece", "Jerusalem, Israel", "Damascus, Syria", "Varanasi, India"), 2),
	_item(89, "hard", 500000, "Technology", "Who is regarded as the father of modern computer science?", ("Charles Babbage", "Alan Turing", "John von Neumann", "Tim Berners-Lee"), 1),
	_item(90, "hard", 1000000, "Astronomy", "What is the closest star to our solar system?", ("Betelgeuse", "Alpha Centauri", "Proxima Centauri", "Sirius"), 2),
	_item(91, "hard", 64000, "Language", "Which of these languages is NOT Indo-European?", ("Danish", "Persian", "Hungarian", "Greek"), 2),
	_item(92, "hard", 125000, "Science", "Who proved that DNA has a double helix structure?", ("Watson and Crick", "Franklin and Wilkins", "Mendel and Morgan", "Sanger and Kornberg"), 0),
	_item(93, "hard", 250000, "Medicine", "What was the first successful vaccine developed?", ("Polio", "Tuberculosis", "Rabies", "Smallpox"), 3),
	_item(94, "hard", 500000, "Literature", "Which famous poet wrote 'Do not go gentle into that good night'?", ("T.S. Eliot", "Dylan Thomas", "W.H. Auden", "Sylvia Plath"), 1),
	_item(95, "hard", 1000000, "Science", "What is the most abundant gas in Earth's atmosphere?", ("Oxygen", "Carbon Dioxide", "Nitrogen", "Argon"), 2),
	_item(96, "hard", 64000, "Physics", "Who discovered the neutron?", ("Ernest Rutherford", "Marie Curie", "James Chadwick", "Niels Bohr"), 2),
	_item(97, "hard", 125000, "Entertainment", "Which movie won the first Academy Award for Best Picture?", ("Wings", "Gone with the Wind", "Casablanca", "All Quiet on the Western Front"), 0),
	_item(98, "hard", 250000, "Games", "Which chess piece can only move diagonally?", ("Knight", "Rook", "Bishop", "Queen"), 2),
	_item(99, "hard", 500000, "Technology", "In which decade was the Internet first made available to the public?", ("1960s", "1970s", "1980s", "1990s"), 2),
	_item(100, "hard", 1000000, "History", "Which ancient civilization built Machu Picchu?", ("Maya", "Inca", "Aztec", "Olmec"), 1),
]

EXPECTED_BUCKETS: Dict[str, int] = {"easy": 35, "medium": 29, "hard": 36}


def split_counts(amount: int) -> Dict[str, int]:
	easy = math.floor(amount * EASY_SHARE)
	medium = math.floor(amount * MEDIUM_SHARE)
	return {"easy": easy, "medium": medium, "hard": amount - easy - medium}


class FallbackBank:
	"""Difficulty-bucketed view over a fixed corpus with sampling."""

	def __init__(
		self,
		items: List[Question] | None = None,
		*,
		expected: Dict[str, int] | None = None,
		max_sample: int = MAX_SAMPLE,
	) -> None:
		self._items: List[Question] = list(_BANK if items is None else items)
		self._by_id: Dict[int, Question] = {}
		for item in self._items:
			if item.id in self._by_id:
				raise ValueError(f"duplicate fallback question id {item.id}")
			self._by_id[item.id] = item
		self._buckets: Dict[str, List[Question]] = {d: [] for d in DIFFICULTIES}
		for item in self._items:
			self._buckets[item.difficulty].append(item)
		if expected is not None:
			actual = {d: len(bucket) for d, bucket in self._buckets.items()}
			if actual != expected:
				raise ValueError(f"fallback bucket sizes {actual} do not match {expected}")
		for difficulty, needed in split_counts(max_sample).items():
			if len(self._buckets[difficulty]) < needed:
				raise ValueError(
					f"fallback bank holds {len(self._buckets[difficulty])} {difficulty} questions, "
					f"a {max_sample}-question sample needs {needed}"
				)

	def __len__(self) -> int:
		return len(self._items)

	def all(self) -> List[Question]:
		return list(self._items)

	def by_difficulty(self, difficulty: str) -> List[Question]:
		return list(self._buckets.get(difficulty, []))

	def get(self, question_id: int) -> Question | None:
		return self._by_id.get(question_id)

	def sample(self, amount: int = MAX_SAMPLE, *, rng: random.Random | None = None) -> List[Question]:
		"""Draw ``amount`` questions split across difficulties, ascending by value."""
		if amount < 0:
			raise ValueError("amount must not be negative")
		rng = rng or random.Random()
		selected: List[Question] = []
		for difficulty, count in split_counts(amount).items():
			bucket = self._buckets[difficulty]
			if count > len(bucket):
				raise FallbackExhausted(f"requested {count} {difficulty} questions, only {len(bucket)} available")
			selected.extend(take_random(bucket, count, rng))
		return sort_by_value(selected)

	def draw(self, amount: int = MAX_SAMPLE, *, rng: random.Random | None = None) -> List[Question]:
		"""Like ``sample`` but caps each difficulty at what the bank holds."""
		rng = rng or random.Random()
		selected: List[Question] = []
		for difficulty, count in split_counts(max(0, amount)).items():
			bucket = self._buckets[difficulty]
			selected.extend(take_random(bucket, min(count, len(bucket)), rng))
		return sort_by_value(selected)


_DEFAULT_BANK: FallbackBank | None = None


def get_bank() -> FallbackBank:
	global _DEFAULT_BANK
	if _DEFAULT_BANK is None:
		_DEFAULT_BANK = FallbackBank(expected=EXPECTED_BUCKETS)
	return _DEFAULT_BANK


def get_random_questions(amount: int = MAX_SAMPLE, *, seed: int | None = None) -> List[Question]:
	return get_bank().sample(amount, rng=random.Random(seed))
