# smartcart/data/recipes.py
"""
Static recipe catalog and the dietary tables used by the matcher.

- DIETARY_RESTRICTIONS: options a shopper can pick in settings
- DIETARY_CONFLICTS: restriction -> ingredient flags it rules out
- INGREDIENT_SUBSTITUTIONS: restriction -> exact ingredient name -> suggestion
- RECIPES: recipes; ingredient product ids point into the product catalog
"""

from smartcart.schemas.recipe import Recipe

DIETARY_RESTRICTIONS: list[dict[str, str]] = [
    {"id": "vegetarian", "label": "Vegetarian", "description": "No meat or fish"},
    {"id": "vegan", "label": "Vegan", "description": "No animal products"},
    {"id": "gluten-free", "label": "Gluten-Free", "description": "No gluten-containing grains"},
    {"id": "dairy-free", "label": "Dairy-Free", "description": "No milk products"},
    {"id": "nut-free", "label": "Nut-Free", "description": "No tree nuts or peanuts"},
    {"id": "egg-free", "label": "Egg-Free", "description": "No eggs or egg products"},
    {"id": "halal", "label": "Halal", "description": "Follows Halal dietary laws"},
    {"id": "low-sugar", "label": "Low Sugar", "description": "Reduced sugar content"},
]

DIETARY_RESTRICTION_IDS = frozenset(r["id"] for r in DIETARY_RESTRICTIONS)

# Only definite "contains-*" flags conflict; "may-contain-*" is informational.
# halal and low-sugar have no ingredient flags yet, so they never conflict.
DIETARY_CONFLICTS: dict[str, frozenset[str]] = {
    "vegetarian": frozenset({"contains-meat", "contains-fish"}),
    "vegan": frozenset(
        {
            "contains-meat",
            "contains-fish",
            "contains-dairy",
            "contains-egg",
            "contains-honey",
        }
    ),
    "gluten-free": frozenset({"contains-gluten"}),
    "dairy-free": frozenset({"contains-dairy"}),
    "nut-free": frozenset({"contains-nuts"}),
    "egg-free": frozenset({"contains-egg"}),
}

INGREDIENT_SUBSTITUTIONS: dict[str, dict[str, str]] = {
    "vegetarian": {
        "Beef": "Plant-based beef alternative",
        "Chicken": "Tofu or tempeh",
        "Bacon": "Plant-based bacon or smoked coconut chips",
        "Fish": "Jackfruit or heart of palm",
    },
    "vegan": {
        "Milk": "Almond milk or soy milk",
        "Eggs": "Flax egg (1 tbsp ground flaxseed + 3 tbsp water)",
        "Cheese": "Nutritional yeast or plant-based cheese",
        "Butter": "Plant-based butter or coconut oil",
        "Honey": "Maple syrup or agave nectar",
    },
    "gluten-free": {
        "Flour": "Gluten-free flour blend",
        "Pasta": "Rice pasta or chickpea pasta",
        "Bread": "Gluten-free bread",
        "Soy Sauce": "Tamari or coconut aminos",
    },
    "dairy-free": {
        "Milk": "Almond milk or oat milk",
        "Butter": "Coconut oil or plant-based butter",
        "Cream": "Coconut cream",
        "Cheese": "Dairy-free cheese alternative",
    },
    "nut-free": {
        "Almond milk": "Oat milk or rice milk",
        "Peanut butter": "Sunflower seed butter",
        "Cashews": "Sunflower seeds or pumpkin seeds",
    },
    "egg-free": {
        "Eggs (binding)": "Applesauce or mashed banana",
        "Eggs (leavening)": "Baking soda + vinegar",
        "Egg wash": "Aquafaba (chickpea liquid)",
    },
}


def _i(name: str, quantity: str, product_id: str, *flags: str) -> dict:
    return {
        "name": name,
        "quantity": quantity,
        "product_id": product_id,
        "dietary_flags": flags,
    }


_RECIPE_DATA: list[dict] = [
    {
        "id": 1,
        "name": "Pasta Carbonara",
        "category": "Italian",
        "difficulty": "Medium",
        "time": "30 min",
        "dietary_tags": [],
        "description": "A classic Italian pasta dish with eggs, cheese, and bacon",
        "ingredients": [
            _i("Pasta", "200g", "3", "contains-gluten"),
            _i("Eggs", "2", "10", "contains-egg"),
            _i("Parmesan Cheese", "50g", "2", "contains-dairy"),
            _i("Bacon", "100g", "12", "contains-meat"),
        ],
        "instructions": [
            "Cook pasta according to package instructions.",
            "Fry bacon until crisp.",
            "Beat eggs and mix with grated cheese.",
            "Drain pasta and immediately add to eggs mixture, stirring quickly.",
            "Add bacon and serve immediately.",
        ],
    },
    {
        "id": 2,
        "name": "Vegetable Stir-Fry",
        "category": "Asian",
        "difficulty": "Easy",
        "time": "20 min",
        "dietary_tags": ["vegetarian", "vegan", "dairy-free"],
        "description": "A quick and healthy vegetable stir-fry with a savory sauce",
        "ingredients": [
            _i("Mixed Vegetables", "300g", "9"),
            _i("Soy Sauce", "2 tbsp", "5", "contains-gluten"),
            _i("Garlic", "2 cloves", "9"),
            _i("Rice", "150g", "5"),
        ],
        "instructions": [
            "Prepare all vegetables by washing and chopping them.",
            "Heat oil in a wok or large frying pan.",
            "Add garlic and stir-fry for 30 seconds.",
            "Add vegetables and stir-fry for 5 minutes.",
            "Add soy sauce and continue cooking for 2 minutes.",
            "Serve hot with rice.",
        ],
    },
    {
        "id": 3,
        "name": "Banana Bread",
        "category": "Baking",
        "difficulty": "Easy",
        "time": "60 min",
        "dietary_tags": ["vegetarian"],
        "description": "A moist and delicious banana bread that's perfect for breakfast or snack time",
        "ingredients": [
            _i("Bananas", "3 ripe", "1"),
            _i("Flour", "250g", "5", "contains-gluten"),
            _i("Sugar", "100g", "5"),
            _i("Eggs", "2", "10", "contains-egg"),
            _i("Butter", "100g", "10", "contains-dairy"),
        ],
        "instructions": [
            "Preheat oven to 180°C and grease a loaf pan.",
            "Mash bananas in a mixing bowl.",
            "Add melted butter and sugar, mix well.",
            "Beat in eggs one at a time.",
            "Fold in flour and baking soda.",
            "Pour batter into the prepared pan and bake for 50 minutes.",
            "Let cool before slicing.",
        ],
    },
    {
        "id": 4,
        "name": "Greek Salad",
        "category": "Mediterranean",
        "difficulty": "Easy",
        "time": "15 min",
        "dietary_tags": ["vegetarian", "gluten-free"],
        "description": "A refreshing salad with tomatoes, cucumber, olives, and feta cheese",
        "ingredients": [
            _i("Tomatoes", "2", "9"),
            _i("Cucumber", "1", "9"),
            _i("Red Onion", "1/2", "9"),
            _i("Feta Cheese", "100g", "2", "contains-dairy"),
            _i("Olives", "handful", "5"),
            _i("Olive Oil", "2 tbsp", "5"),
        ],
        "instructions": [
            "Chop tomatoes, cucumber, and red onion.",
            "Mix vegetables in a bowl.",
            "Add crumbled feta cheese and olives.",
            "Drizzle with olive oil and sprinkle with oregano.",
            "Toss gently and serve.",
        ],
    },
    {
        "id": 5,
        "name": "Chocolate Chip Cookies",
        "category": "Baking",
        "difficulty": "Medium",
        "time": "30 min",
        "dietary_tags": ["vegetarian"],
        "description": "Classic homemade chocolate chip cookies that are soft and chewy",
        "ingredients": [
            _i("Flour", "280g", "5", "contains-gluten"),
            _i("Butter", "170g", "10", "contains-dairy"),
            _i("Sugar", "150g", "5"),
            _i("Chocolate Chips", "200g", "11", "may-contain-dairy"),
            _i("Eggs", "1", "10", "contains-egg"),
            _i("Vanilla Extract", "1 tsp", "5"),
        ],
        "instructions": [
            "Preheat oven to 190°C.",
            "Cream butter and sugars until smooth.",
            "Beat in eggs and vanilla.",
            "Add dry ingredients gradually.",
            "Stir in chocolate chips.",
            "Drop spoonfuls onto baking sheets and bake for 10 minutes.",
            "Cool on wire racks before serving.",
        ],
    },
    {
        "id": 6,
        "name": "Vegan Buddha Bowl",
        "category": "Vegan",
        "difficulty": "Easy",
        "time": "25 min",
        "dietary_tags": ["vegetarian", "vegan", "dairy-free", "gluten-free", "egg-free"],
        "description": "A nutritious bowl packed with colorful vegetables and plant-based protein",
        "ingredients": [
            _i("Quinoa", "100g", "5"),
            _i("Chickpeas", "1 can", "5"),
            _i("Sweet Potato", "1 medium", "9"),
            _i("Kale", "2 cups", "9"),
            _i("Avocado", "1", "9"),
            _i("Tahini", "2 tbsp", "5"),
        ],
        "instructions": [
            "Cook quinoa according to package instructions.",
            "Roast chickpeas and sweet potato cubes with spices at 200°C for 20 minutes.",
            "Massage kale with olive oil and lemon juice.",
            "Arrange all ingredients in a bowl.",
            "Slice avocado and place on top.",
            "Drizzle with tahini sauce and serve.",
        ],
    },
    {
        "id": 7,
        "name": "Gluten-Free Pancakes",
        "category": "Breakfast",
        "difficulty": "Easy",
        "time": "20 min",
        "dietary_tags": ["vegetarian", "gluten-free"],
        "description": "Fluffy and delicious pancakes made with gluten-free flour",
        "ingredients": [
            _i("Gluten-Free Flour", "200g", "5"),
            _i("Eggs", "2", "10", "contains-egg"),
            _i("Milk", "240ml", "3", "contains-dairy"),
            _i("Baking Powder", "1 tbsp", "5"),
            _i("Sugar", "2 tbsp", "5"),
            _i("Vanilla Extract", "1 tsp", "5"),
        ],
        "instructions": [
            "Mix dry ingredients in a bowl.",
            "In another bowl, whisk together eggs, milk, and vanilla.",
            "Combine wet and dry ingredients until smooth.",
            "Heat a non-stick pan over medium heat.",
            "Pour batter onto the pan to form pancakes.",
            "Cook until bubbles form, then flip and cook the other side.",
            "Serve with maple syrup or fresh fruit.",
        ],
    },
    {
        "id": 8,
        "name": "Caprese Salad",
        "category": "Italian",
        "difficulty": "Easy",
        "time": "10 min",
        "dietary_tags": ["vegetarian", "gluten-free"],
        "description": "A simple Italian salad with fresh tomatoes, mozzarella, and basil",
        "ingredients": [
            _i("Tomatoes", "2 large", "9"),
            _i("Fresh Mozzarella", "200g", "2", "contains-dairy"),
            _i("Fresh Basil", "handful", "9"),
            _i("Olive Oil", "2 tbsp", "5"),
            _i("Balsamic Vinegar", "1 tbsp", "5"),
        ],
        "instructions": [
            "Slice tomatoes and mozzarella.",
            "Arrange alternating slices of tomato and mozzarella on a plate.",
            "Tuck basil leaves between the slices.",
            "Drizzle with olive oil and balsamic vinegar.",
            "Season with salt and pepper to taste.",
            "Serve immediately.",
        ],
    },
    {
        "id": 9,
        "name": "Beef Stir-Fry",
        "category": "Asian",
        "difficulty": "Medium",
        "time": "25 min",
        "dietary_tags": ["dairy-free", "egg-free"],
        "description": "A savory stir-fry with tender beef strips and crisp vegetables",
        "ingredients": [
            _i("Beef Strips", "300g", "15", "contains-meat"),
            _i("Bell Peppers", "2", "9"),
            _i("Broccoli", "1 head", "9"),
            _i("Soy Sauce", "3 tbsp", "5", "contains-gluten"),
            _i("Ginger", "1 tbsp, grated", "9"),
            _i("Rice", "200g", "5"),
        ],
        "instructions": [
            "Slice beef into thin strips and marinate in soy sauce.",
            "Chop vegetables into bite-sized pieces.",
            "Heat oil in a wok over high heat.",
            "Stir-fry beef until browned, then remove from pan.",
            "Stir-fry vegetables and ginger until tender-crisp.",
            "Return beef to the pan and add sauce.",
            "Toss until everything is coated and heated through.",
            "Serve hot over cooked rice.",
        ],
    },
    {
        "id": 10,
        "name": "Mango Smoothie Bowl",
        "category": "Breakfast",
        "difficulty": "Easy",
        "time": "10 min",
        "dietary_tags": ["vegetarian", "gluten-free"],
        "description": "A refreshing and nutritious smoothie bowl topped with fresh fruits and granola",
        "ingredients": [
            _i("Frozen Mango", "200g", "9"),
            _i("Banana", "1", "1"),
            _i("Greek Yogurt", "200g", "2", "contains-dairy"),
            _i("Honey", "1 tbsp", "5", "contains-honey"),
            _i("Granola", "3 tbsp", "14", "may-contain-gluten", "may-contain-nuts"),
            _i("Fresh Berries", "handful", "9"),
        ],
        "instructions": [
            "Blend frozen mango, banana, yogurt, and honey until smooth.",
            "Pour into a bowl.",
            "Top with granola and fresh berries.",
            "Add optional toppings like coconut flakes or chia seeds.",
            "Serve immediately.",
        ],
    },
    {
        "id": 11,
        "name": "Chicken Tikka Masala",
        "category": "Indian",
        "difficulty": "Medium",
        "time": "45 min",
        "dietary_tags": ["gluten-free"],
        "description": "A flavorful Indian curry with tender chicken in a creamy tomato sauce",
        "ingredients": [
            _i("Chicken Breast", "500g", "15", "contains-meat"),
            _i("Yogurt", "200g", "2", "contains-dairy"),
            _i("Tomato Sauce", "300g", "5"),
            _i("Heavy Cream", "100ml", "3", "contains-dairy"),
            _i("Spices (Garam Masala)", "2 tbsp", "5"),
            _i("Rice", "200g", "5"),
        ],
        "instructions": [
            "Cut chicken into cubes and marinate in yogurt and spices.",
            "Grill or bake chicken until cooked through.",
            "In a pan, heat oil and add tomato sauce and spices.",
            "Add grilled chicken and simmer for 10 minutes.",
            "Stir in cream and simmer for another 5 minutes.",
            "Serve hot with rice or naan bread.",
        ],
    },
    {
        "id": 12,
        "name": "Avocado Toast",
        "category": "Breakfast",
        "difficulty": "Easy",
        "time": "10 min",
        "dietary_tags": ["vegetarian", "vegan", "dairy-free"],
        "description": "A simple and nutritious breakfast with creamy avocado on toasted bread",
        "ingredients": [
            _i("Bread", "2 slices", "4", "contains-gluten"),
            _i("Avocado", "1", "9"),
            _i("Lemon Juice", "1 tsp", "9"),
            _i("Cherry Tomatoes", "5", "9"),
            _i("Salt & Pepper", "to taste", "7"),
        ],
        "instructions": [
            "Toast the bread slices.",
            "Mash the avocado with lemon juice, salt, and pepper.",
            "Spread the avocado mixture on the toast.",
            "Top with halved cherry tomatoes and any additional toppings.",
            "Season with more salt and pepper if desired.",
            "Serve immediately.",
        ],
    },
    {
        "id": 13,
        "name": "Lentil Soup",
        "category": "Soup",
        "difficulty": "Medium",
        "time": "40 min",
        "dietary_tags": ["vegetarian", "vegan", "dairy-free", "gluten-free", "egg-free"],
        "description": "A hearty and nutritious soup packed with lentils and vegetables",
        "ingredients": [
            _i("Red Lentils", "200g", "5"),
            _i("Carrots", "2", "9"),
            _i("Celery", "2 stalks", "9"),
            _i("Onion", "1", "9"),
            _i("Vegetable Broth", "1L", "5"),
            _i("Cumin", "1 tsp", "5"),
        ],
        "instructions": [
            "Chop all vegetables.",
            "In a large pot, sauté onion, carrots, and celery.",
            "Add lentils and spices, stir to combine.",
            "Pour in vegetable broth and bring to a boil.",
            "Reduce heat and simmer for 30 minutes.",
            "Blend partially for a creamier texture if desired.",
            "Season with salt and pepper to taste.",
        ],
    },
    {
        "id": 14,
        "name": "Berry Smoothie",
        "category": "Beverage",
        "difficulty": "Easy",
        "time": "5 min",
        "dietary_tags": ["vegetarian", "gluten-free"],
        "description": "A refreshing and nutritious smoothie packed with berries and yogurt",
        "ingredients": [
            _i("Mixed Berries", "150g", "9"),
            _i("Banana", "1", "1"),
            _i("Greek Yogurt", "100g", "2", "contains-dairy"),
            _i("Honey", "1 tbsp", "5", "contains-honey"),
            _i("Almond Milk", "200ml", "3", "contains-nuts"),
        ],
        "instructions": [
            "Place all ingredients in a blender.",
            "Blend until smooth.",
            "Add more liquid if needed to reach desired consistency.",
            "Pour into glasses and serve immediately.",
        ],
    },
    {
        "id": 15,
        "name": "Veggie Burger",
        "category": "Vegetarian",
        "difficulty": "Medium",
        "time": "35 min",
        "dietary_tags": ["vegetarian", "vegan", "dairy-free", "egg-free"],
        "description": "A delicious plant-based burger with a hearty patty and fresh toppings",
        "ingredients": [
            _i("Black Beans", "1 can", "5"),
            _i("Quinoa", "100g cooked", "5"),
            _i("Onion", "1 small", "9"),
            _i("Breadcrumbs", "1/2 cup", "4", "contains-gluten"),
            _i("Burger Buns", "4", "4", "contains-gluten"),
            _i("Lettuce", "4 leaves", "9"),
            _i("Tomato", "1", "9"),
        ],
        "instructions": [
            "Mash black beans in a bowl.",
            "Add cooked quinoa, finely chopped onion, and breadcrumbs.",
            "Mix in spices and form into patties.",
            "Chill patties for 30 minutes.",
            "Cook patties in a pan with oil until browned on both sides.",
            "Toast burger buns if desired.",
            "Assemble burgers with lettuce, tomato, and your favorite condiments.",
        ],
    },
    {
        "id": 16,
        "name": "Chicken Noodle Soup",
        "category": "Soup",
        "difficulty": "Medium",
        "time": "50 min",
        "dietary_tags": ["dairy-free"],
        "description": "A comforting classic soup with tender chicken, vegetables, and noodles",
        "ingredients": [
            _i("Chicken Breast", "300g", "15", "contains-meat"),
            _i("Egg Noodles", "150g", "3", "contains-gluten", "contains-egg"),
            _i("Carrots", "2", "9"),
            _i("Celery", "2 stalks", "9"),
            _i("Onion", "1", "9"),
            _i("Chicken Broth", "1.5L", "5"),
        ],
        "instructions": [
            "In a large pot, cook chicken in broth until done, then remove and shred.",
            "Sauté chopped onions, carrots, and celery in the pot.",
            "Return chicken to pot and add more broth.",
            "Bring to a boil, then add noodles.",
            "Cook until noodles are tender.",
            "Season with salt, pepper, and herbs to taste.",
            "Serve hot.",
        ],
    },
    {
        "id": 17,
        "name": "Spicy Tofu Stir-Fry",
        "category": "Asian",
        "difficulty": "Medium",
        "time": "25 min",
        "dietary_tags": ["vegetarian", "vegan", "dairy-free", "egg-free"],
        "description": "A flavorful stir-fry with crispy tofu and vegetables in a spicy sauce",
        "ingredients": [
            _i("Firm Tofu", "400g", "2"),
            _i("Bell Peppers", "2", "9"),
            _i("Snow Peas", "100g", "9"),
            _i("Soy Sauce", "3 tbsp", "5", "contains-gluten"),
            _i("Sriracha", "1 tbsp", "5"),
            _i("Ginger", "1 tbsp, grated", "9"),
            _i("Rice", "200g", "5"),
        ],
        "instructions": [
            "Press tofu to remove excess water, then cut into cubes.",
            "Heat oil in a pan and fry tofu until golden and crispy.",
            "Remove tofu and set aside.",
            "In the same pan, stir-fry vegetables and ginger.",
            "Mix soy sauce and sriracha for the sauce.",
            "Add tofu back to the pan and pour in the sauce.",
            "Toss everything together until well coated.",
            "Serve hot over cooked rice.",
        ],
    },
    {
        "id": 18,
        "name": "Nut-Free Granola",
        "category": "Breakfast",
        "difficulty": "Easy",
        "time": "35 min",
        "dietary_tags": ["vegetarian", "dairy-free", "nut-free"],
        "description": "A crunchy homemade granola without nuts, perfect for those with allergies",
        "ingredients": [
            _i("Rolled Oats", "300g", "14", "contains-gluten"),
            _i("Sunflower Seeds", "50g", "5"),
            _i("Pumpkin Seeds", "50g", "5"),
            _i("Dried Cranberries", "100g", "5"),
            _i("Honey", "80ml", "5", "contains-honey"),
            _i("Coconut Oil", "60ml", "5"),
            _i("Cinnamon", "1 tsp", "5"),
        ],
        "instructions": [
            "Preheat oven to 150°C and line a baking tray.",
            "Mix oats, seeds, and cinnamon in a large bowl.",
            "Heat honey and coconut oil until melted, then pour over dry ingredients.",
            "Stir until everything is well coated.",
            "Spread mixture evenly on the baking tray.",
            "Bake for 25-30 minutes, stirring halfway through.",
            "Allow to cool completely, then mix in dried cranberries.",
            "Store in an airtight container.",
        ],
    },
    {
        "id": 19,
        "name": "Ratatouille",
        "category": "French",
        "difficulty": "Medium",
        "time": "60 min",
        "dietary_tags": [
            "vegetarian",
            "vegan",
            "gluten-free",
            "dairy-free",
            "egg-free",
            "nut-free",
        ],
        "description": "A classic French vegetable stew with eggplant, zucchini, and tomatoes",
        "ingredients": [
            _i("Eggplant", "1", "9"),
            _i("Zucchini", "2", "9"),
            _i("Bell Pepper", "1", "9"),
            _i("Tomatoes", "4", "9"),
            _i("Onion", "1", "9"),
            _i("Garlic", "3 cloves", "9"),
            _i("Olive Oil", "3 tbsp", "5"),
            _i("Herbs de Provence", "2 tsp", "5"),
        ],
        "instructions": [
            "Chop all vegetables into similar-sized chunks.",
            "In a large pot, sauté onion and garlic until fragrant.",
            "Add bell pepper and cook for 5 minutes.",
            "Add eggplant and zucchini, cook until starting to soften.",
            "Add tomatoes, herbs, salt, and pepper.",
            "Cover and simmer for 30-40 minutes, stirring occasionally.",
            "Serve hot or at room temperature.",
        ],
    },
    {
        "id": 20,
        "name": "Cauliflower Pizza Crust",
        "category": "Italian",
        "difficulty": "Medium",
        "time": "45 min",
        "dietary_tags": ["vegetarian", "gluten-free"],
        "description": "A low-carb alternative to traditional pizza crust made with cauliflower",
        "ingredients": [
            _i("Cauliflower", "1 medium head", "9"),
            _i("Eggs", "2", "10", "contains-egg"),
            _i("Mozzarella Cheese", "100g", "2", "contains-dairy"),
            _i("Parmesan Cheese", "30g", "2", "contains-dairy"),
            _i("Italian Seasoning", "1 tsp", "5"),
            _i("Tomato Sauce", "for topping", "5"),
            _i("Toppings of Choice", "as desired", "9"),
        ],
        "instructions": [
            "Preheat oven to 200°C and line a baking sheet with parchment paper.",
            "Pulse cauliflower in a food processor until rice-like consistency.",
            "Microwave cauliflower for 5 minutes, then let cool.",
            "Squeeze out excess moisture using a clean kitchen towel.",
            "Mix cauliflower with eggs, cheese, and seasonings.",
            "Form into a pizza crust shape on the baking sheet.",
            "Bake for 15-20 minutes until golden.",
            "Add sauce and toppings, then bake for another 10 minutes.",
            "Let cool slightly before slicing.",
        ],
    },
]

RECIPES: list[Recipe] = [Recipe.model_validate(r) for r in _RECIPE_DATA]
